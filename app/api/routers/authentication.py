from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from app.api.dependencies import get_auth_service, get_current_user, wants_json
from app.api.templating import templates
from app.core.config import settings
from app.db.models.users import User
from app.features.authentication.schemas import SignInIn
from app.features.authentication.services import AuthService, NotAuthenticated
from app.features.users.schemas import UserOut

DEFAULT_NEXT_URL = "/admin/homework"

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={404: {"description": "Not Found"}},
)


def safe_next_url(next_url: Optional[str]) -> str:
    """Uniquement des chemins relatifs au site (pas de `//host` ni d'URL absolue)."""
    if not next_url or not next_url.startswith("/") or next_url.startswith("//"):
        return DEFAULT_NEXT_URL
    return next_url


# -----------------------------
# Login (formulaire)
# -----------------------------
@router.get(
    "/login",
    summary="Formulaire de connexion",
    response_class=HTMLResponse,
)
def login_page(request: Request, next_url: Optional[str] = Query(None, alias="next")):
    return templates.TemplateResponse(
        request,
        "login.html",
        {"next_url": safe_next_url(next_url), "error": None, "username": ""},
    )


@router.post(
    "/login",
    summary="Se connecter",
    description="Pose le token de session en cookie httpOnly puis redirige vers `next`.",
)
def login(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    next_url: Optional[str] = Form(None, alias="next"),
    svc: AuthService = Depends(get_auth_service),
):
    target = safe_next_url(next_url)
    try:
        session_out = svc.sign_in(SignInIn(username=username, password=password))
    except NotAuthenticated as e:
        if wants_json(request):
            return JSONResponse({"error": e.detail}, status_code=status.HTTP_401_UNAUTHORIZED)
        return templates.TemplateResponse(
            request,
            "login.html",
            {"next_url": target, "error": e.detail, "username": username},
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if wants_json(request):
        response = JSONResponse(session_out.model_dump())
    else:
        response = RedirectResponse(target, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session_out.session_token,
        httponly=True,
        samesite=settings.SESSION_COOKIE_SAMESITE,
        secure=settings.SESSION_COOKIE_SECURE,
        max_age=session_out.expires_in,
        path="/",
    )
    return response


# -----------------------------
# Logout
# -----------------------------
@router.post(
    "/logout",
    summary="Se déconnecter",
    status_code=status.HTTP_303_SEE_OTHER,
)
def logout():
    response = RedirectResponse("/auth/login", status_code=status.HTTP_303_SEE_OTHER)
    # Supprime le cookie côté client
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path="/")
    return response


# -----------------------------
# Me (profil courant)
# -----------------------------
@router.get(
    "/me",
    summary="Récupérer l'utilisateur courant",
    response_model=UserOut,
    responses={
        200: {"description": "Utilisateur courant"},
        401: {"description": "Session absente, invalide ou expirée"},
    },
)
def me(user: User = Depends(get_current_user)):
    return user
