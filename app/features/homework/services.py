"""
➡️ But : Logique de l'écran devoirs : lecture de la liste + traitement des intents.

- list_all() : liste complète triée par date décroissante ; une erreur de base
  est loggée et dégradée en liste vide (la page s'affiche quand même).
- handle(action) : create / update / delete / invalid.
  Champs requis vides -> HomeworkValidationError, aucun appel à la base.
  Échec de la base -> StoreError (loggée), sans retry.

Le contrôle admin est fait en amont (dépendance require_admin) : le service
suppose un appelant déjà autorisé.
"""

import logging
from datetime import date, datetime, timezone
from typing import Callable, Optional, Sequence, Tuple

from app.db.models.homework import Homework
from app.db.repositories.base import StoreError
from app.db.repositories.homework import HomeworkRepository
from app.features.homework.schemas import (
    CreateHomeworkIn,
    DeleteHomeworkIn,
    HomeworkAction,
    InvalidActionIn,
    UpdateHomeworkIn,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "All fields are required"
INVALID_ACTION_MESSAGE = "Invalid action"


class HomeworkActionError(Exception):
    """Erreur renvoyée au client en 400 avec `{error: message}`."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class HomeworkValidationError(HomeworkActionError):
    pass


class InvalidActionError(HomeworkActionError):
    def __init__(self, message: str = INVALID_ACTION_MESSAGE):
        super().__init__(message)


MAX_HOMEWORK_ID = 2**63 - 1  # INTEGER signé 64 bits (SQLite / BIGINT)


def _parse_id(raw: str) -> int:
    try:
        homework_id = int(raw)
    except ValueError:
        raise HomeworkValidationError("Invalid homework id")
    if not 0 < homework_id <= MAX_HOMEWORK_ID:
        raise HomeworkValidationError("Invalid homework id")
    return homework_id


def _parse_date(raw: str) -> date:
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise HomeworkValidationError("Invalid date")


class HomeworkService:
    def __init__(
        self,
        repo: HomeworkRepository,
        *,
        now_fn: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.repo = repo
        self.now_fn = now_fn

    # -------- Read --------

    def list_all(self) -> Tuple[Sequence[Homework], Optional[str]]:
        """
        Retourne (devoirs, erreur). En cas d'échec de la base : ([], message).
        L'erreur sert au diagnostic, elle n'est pas affichée comme un échec de page.
        """
        try:
            return self.repo.list_by_date_desc(), None
        except StoreError as e:
            logger.error("Error fetching homework: %s", e.message)
            return [], e.message

    # -------- Write --------

    def handle(self, action: HomeworkAction) -> None:
        if isinstance(action, CreateHomeworkIn):
            self.create(action)
        elif isinstance(action, UpdateHomeworkIn):
            self.update(action)
        elif isinstance(action, DeleteHomeworkIn):
            self.delete(action)
        elif isinstance(action, InvalidActionIn):
            logger.warning("Rejected homework action with intent=%r", action.intent)
            raise InvalidActionError()
        else:
            raise TypeError(f"Unhandled homework action: {type(action).__name__}")

    def create(self, payload: CreateHomeworkIn) -> None:
        if not payload.subject or not payload.description or not payload.assigned_date:
            raise HomeworkValidationError(REQUIRED_FIELDS_MESSAGE)
        homework_date = _parse_date(payload.assigned_date)

        now = self.now_fn()
        try:
            created = self.repo.create_homework(
                subject=payload.subject,
                description=payload.description,
                homework_date=homework_date,
                created_at=now,
                updated_at=now,
            )
        except StoreError as e:
            logger.error("Error creating homework: %s", e.message)
            raise
        logger.info("Homework %s created for %s", created.id, homework_date.isoformat())

    def update(self, payload: UpdateHomeworkIn) -> None:
        if (
            not payload.homework_id
            or not payload.subject
            or not payload.description
            or not payload.assigned_date
        ):
            raise HomeworkValidationError(REQUIRED_FIELDS_MESSAGE)
        homework_id = _parse_id(payload.homework_id)
        homework_date = _parse_date(payload.assigned_date)

        try:
            self.repo.update_homework(
                homework_id,
                subject=payload.subject,
                description=payload.description,
                homework_date=homework_date,
                updated_at=self.now_fn(),
            )
        except StoreError as e:
            logger.error("Error updating homework %s: %s", homework_id, e.message)
            raise
        logger.info("Homework %s updated", homework_id)

    def delete(self, payload: DeleteHomeworkIn) -> None:
        if not payload.homework_id:
            raise HomeworkValidationError("Homework ID is required")
        homework_id = _parse_id(payload.homework_id)

        try:
            self.repo.delete_homework(homework_id)
        except StoreError as e:
            logger.error("Error deleting homework %s: %s", homework_id, e.message)
            raise
        logger.info("Homework %s deleted", homework_id)

