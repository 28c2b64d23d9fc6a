"""
➡️ But : L'écran d'administration des devoirs (/admin/homework).

GET  : garde admin -> liste complète -> rendu HTML (ou JSON si demandé).
POST : garde admin -> intent (create | update | delete) -> redirection 303 vers l'écran,
       ou 400 avec le message d'erreur (page ré-affichée ou `{error: ...}` en JSON).

Aucune logique métier ici : parsing du formulaire, appel au service, choix de la réponse.
"""

from dataclasses import replace
from datetime import date
from typing import Optional, Sequence
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from app.api.dependencies import get_homework_service, get_today, require_admin, wants_json
from app.api.templating import templates
from app.db.models.homework import Homework
from app.db.models.users import User
from app.db.repositories.base import StoreError
from app.features.homework.schemas import (
    ActionErrorOut,
    CreateHomeworkIn,
    HomeworkAction,
    HomeworkOut,
    UpdateHomeworkIn,
    parse_action,
)
from app.features.homework.services import HomeworkActionError, HomeworkService
from app.features.homework.views import (
    HomeworkViewState,
    build_context,
    find_by_id,
    parse_date_or,
    state_from_query,
)

HOMEWORK_URL = "/admin/homework"

router = APIRouter(
    prefix=HOMEWORK_URL,
    tags=["homework"],
    responses={403: {"description": "Admin only"}},
)


def _render(
    request: Request,
    records: Sequence[Homework],
    state: HomeworkViewState,
    *,
    today: date,
    admin: User,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    context = build_context(records, state, today=today)
    context["admin"] = admin
    return templates.TemplateResponse(request, "homework.html", context, status_code=status_code)


def _state_after_error(
    action: HomeworkAction,
    records: Sequence[Homework],
    message: str,
    selected_date: date,
) -> HomeworkViewState:
    """Ré-ouvre le formulaire concerné avec la saisie refusée, sur la date filtrée."""
    state = HomeworkViewState(selected_date=selected_date)
    if isinstance(action, (CreateHomeworkIn, UpdateHomeworkIn)):
        editing = None
        if isinstance(action, UpdateHomeworkIn) and action.homework_id.isdecimal():
            editing = find_by_id(records, int(action.homework_id))
        state = state.start_edit(editing) if editing is not None else state.open_create_form()
        state = replace(state, form_values={
            "subject": action.subject,
            "description": action.description,
            "assignedDate": action.assigned_date,
        })
    return state.with_error(message)


# -----------------------------
# Read
# -----------------------------
@router.get(
    "",
    summary="Écran des devoirs",
    response_class=HTMLResponse,
)
def homework_screen(
    request: Request,
    date_param: Optional[str] = Query(None, alias="date", description="Date filtrée (YYYY-MM-DD)"),
    form: Optional[str] = Query(None, description="`new` ouvre le formulaire de création"),
    edit: Optional[str] = Query(None, description="Id du devoir à éditer"),
    admin: User = Depends(require_admin),
    svc: HomeworkService = Depends(get_homework_service),
    today: date = Depends(get_today),
):
    records, _error = svc.list_all()
    if wants_json(request):
        return JSONResponse(
            {"homework": [HomeworkOut.model_validate(hw).model_dump(mode="json") for hw in records]}
        )
    state = state_from_query(
        records,
        today=today,
        date_param=date_param,
        form_param=form,
        edit_param=edit,
    )
    return _render(request, records, state, today=today, admin=admin)


# -----------------------------
# Write (dispatch sur intent)
# -----------------------------
@router.post(
    "",
    summary="Créer / modifier / supprimer un devoir",
    responses={
        303: {"description": "Succès : redirection vers l'écran"},
        400: {"model": ActionErrorOut, "description": "`{error: message}`"},
    },
)
def homework_action(
    request: Request,
    date_param: Optional[str] = Query(None, alias="date", description="Date filtrée à conserver"),
    intent: Optional[str] = Form(None),
    homework_id: str = Form("", alias="homeworkId"),
    subject: str = Form(""),
    description: str = Form(""),
    assigned_date: str = Form("", alias="assignedDate"),
    admin: User = Depends(require_admin),
    svc: HomeworkService = Depends(get_homework_service),
    today: date = Depends(get_today),
):
    action = parse_action({
        "intent": intent,
        "homeworkId": homework_id,
        "subject": subject,
        "description": description,
        "assignedDate": assigned_date,
    })
    selected_date = parse_date_or(date_param, today)
    try:
        svc.handle(action)
    except (HomeworkActionError, StoreError) as e:
        if wants_json(request):
            return JSONResponse(
                ActionErrorOut(error=e.message).model_dump(),
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        records, _error = svc.list_all()
        state = _state_after_error(action, records, e.message, selected_date)
        return _render(
            request,
            records,
            state,
            today=today,
            admin=admin,
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    # la date filtrée survit à l'action
    target = HOMEWORK_URL
    if date_param and selected_date.isoformat() == date_param:
        target = f"{HOMEWORK_URL}?{urlencode({'date': date_param})}"
    return RedirectResponse(target, status_code=status.HTTP_303_SEE_OTHER)
