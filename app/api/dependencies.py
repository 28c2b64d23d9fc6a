"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_homework_service() : crée un HomeworkService à partir d’une session DB.

require_admin() : garde d'accès, appelée AVANT tout accès aux devoirs.

get_today() : date du jour dans le fuseau configuré (surchargée dans les tests).

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à injecter dans plusieurs endpoints (Depends()).
"""

from datetime import date
from typing import Optional

from fastapi import Cookie, Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from app.core.config import settings, jwt_settings
from app.db.models.users import User
from app.db.session import get_session

from app.db.repositories.users import UserRepository
from app.features.authentication.services import AuthService, NotAdmin

from app.db.repositories.homework import HomeworkRepository
from app.features.homework.services import HomeworkService
from app.features.homework.views import today_in


# -----------------------------
# Auth
# -----------------------------
def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    return AuthService(user_repo=UserRepository(session), jwt_settings=jwt_settings)


bearer_scheme = HTTPBearer(auto_error=False)

def get_session_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    session_cookie: Optional[str] = Cookie(default=None, alias=settings.SESSION_COOKIE_NAME),
) -> Optional[str]:
    """Header `Authorization: Bearer` si présent, sinon cookie de session."""
    if credentials and credentials.scheme.lower() == "bearer":
        return credentials.credentials
    return session_cookie


def get_current_user(
    session_token: Optional[str] = Depends(get_session_token),
    auth_svc: AuthService = Depends(get_auth_service),
) -> User:
    # NotAuthenticated est traduite par le handler global (redirection login / 401)
    return auth_svc.get_current_user(session_token=session_token)


def require_admin(
    session_token: Optional[str] = Depends(get_session_token),
    auth_svc: AuthService = Depends(get_auth_service),
) -> User:
    try:
        return auth_svc.require_admin(session_token=session_token)
    except NotAdmin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin only")


# -----------------------------
# Homework
# -----------------------------
def get_homework_repository(session: Session = Depends(get_session)) -> HomeworkRepository:
    return HomeworkRepository(session)

def get_homework_service(
    homework_repo: HomeworkRepository = Depends(get_homework_repository),
) -> HomeworkService:
    return HomeworkService(homework_repo)

def get_today() -> date:
    return today_in(settings.TIMEZONE)


# -----------------------------
# Négociation de contenu
# -----------------------------
def wants_json(request: Request) -> bool:
    """Clients API (Accept: application/json) vs navigateur (HTML)."""
    accept = request.headers.get("accept", "")
    return "application/json" in accept and "text/html" not in accept
