"""
➡️ But : Formats d'entrée/sortie de l'écran devoirs.

Une soumission de formulaire est parsée UNE fois en variante typée
(CreateHomeworkIn | UpdateHomeworkIn | DeleteHomeworkIn | InvalidActionIn)
selon le champ caché `intent`, puis traitée par HomeworkService.

Les champs restent des chaînes brutes (éventuellement vides) : la vérification
de présence se fait dans le service, avant tout appel à la base.
"""

from datetime import date, datetime
from typing import Literal, Mapping, Optional, Union

from pydantic import BaseModel


# ---------- IN (variantes d'intent) ----------

class CreateHomeworkIn(BaseModel):
    intent: Literal["create"] = "create"
    subject: str = ""
    description: str = ""
    assigned_date: str = ""


class UpdateHomeworkIn(BaseModel):
    intent: Literal["update"] = "update"
    homework_id: str = ""
    subject: str = ""
    description: str = ""
    assigned_date: str = ""


class DeleteHomeworkIn(BaseModel):
    intent: Literal["delete"] = "delete"
    homework_id: str = ""


class InvalidActionIn(BaseModel):
    intent: Optional[str] = None


HomeworkAction = Union[CreateHomeworkIn, UpdateHomeworkIn, DeleteHomeworkIn, InvalidActionIn]


def _field(form: Mapping[str, object], name: str) -> str:
    value = form.get(name)
    return value if isinstance(value, str) else ""


def parse_action(form: Mapping[str, object]) -> HomeworkAction:
    """
    Construit la variante correspondant au champ `intent` du formulaire.
    Noms de champs du formulaire : subject, description, assignedDate, homeworkId.
    """
    intent = form.get("intent")
    if intent == "create":
        return CreateHomeworkIn(
            subject=_field(form, "subject"),
            description=_field(form, "description"),
            assigned_date=_field(form, "assignedDate"),
        )
    if intent == "update":
        return UpdateHomeworkIn(
            homework_id=_field(form, "homeworkId"),
            subject=_field(form, "subject"),
            description=_field(form, "description"),
            assigned_date=_field(form, "assignedDate"),
        )
    if intent == "delete":
        return DeleteHomeworkIn(homework_id=_field(form, "homeworkId"))
    return InvalidActionIn(intent=intent if isinstance(intent, str) else None)


# ---------- OUT ----------

class HomeworkOut(BaseModel):
    id: int
    subject: str
    description: str
    homework_date: date
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ActionErrorOut(BaseModel):
    error: str
