"""
➡️ But : Tout ce que l'écran devoirs dérive de la liste, sans retourner en base.

- état d'UI (date filtrée, formulaire ouvert, devoir en édition) porté par la query string ;
- vues dérivées : devoirs du jour, devoirs d'une date, libellé relatif d'une date, stats.

Fonctions pures : `today` est toujours passé en paramètre, ce qui rend les tests déterministes.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import urlencode
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.db.models.homework import Homework


def today_in(tz_name: Optional[str] = None) -> date:
    """Date du jour dans le fuseau configuré (TIMEZONE)."""
    return datetime.now(ZoneInfo(tz_name or settings.TIMEZONE)).date()


def parse_date_or(raw: Optional[str], default: date) -> date:
    if not raw:
        return default
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return default


# -----------------------------
# Vues dérivées
# -----------------------------

def homework_for_date(records: Sequence[Homework], day: date) -> List[Homework]:
    """Égalité stricte sur la date, pas de plage."""
    return [hw for hw in records if hw.homework_date == day]


def todays_homework(records: Sequence[Homework], today: date) -> List[Homework]:
    return homework_for_date(records, today)


def format_locale_date(day: date, fmt: Optional[str] = None) -> str:
    return (fmt or settings.DATE_DISPLAY_FORMAT).format(
        year=day.year, month=day.month, day=day.day
    )


def format_date_display(day: date, today: date) -> str:
    """Today / Yesterday / Tomorrow, sinon la date au format local."""
    if isinstance(day, datetime):
        day = day.date()
    if day == today:
        return "Today"
    if day == today - timedelta(days=1):
        return "Yesterday"
    if day == today + timedelta(days=1):
        return "Tomorrow"
    return format_locale_date(day)


def count_by_status(records: Sequence[Homework], status: str) -> int:
    # La colonne status n'existe plus : toujours 0 tant qu'elle n'est pas réintroduite.
    return sum(1 for hw in records if getattr(hw, "status", None) == status)


@dataclass(frozen=True)
class HomeworkStats:
    today: int
    total: int
    pending: int
    completed: int


def homework_stats(records: Sequence[Homework], today: date) -> HomeworkStats:
    return HomeworkStats(
        today=len(todays_homework(records, today)),
        total=len(records),
        pending=count_by_status(records, "pending"),
        completed=count_by_status(records, "completed"),
    )


def find_by_id(records: Sequence[Homework], homework_id: Optional[int]) -> Optional[Homework]:
    if homework_id is None:
        return None
    return next((hw for hw in records if hw.id == homework_id), None)


# -----------------------------
# État d'UI
# -----------------------------

@dataclass(frozen=True)
class HomeworkViewState:
    """
    Création et édition sont exclusives : `editing` non vide => formulaire d'édition,
    sinon `show_form` => formulaire de création.
    `form_values` sert à ré-afficher la saisie après une soumission refusée.
    """
    selected_date: date
    show_form: bool = False
    editing: Optional[Homework] = None
    error: Optional[str] = None
    form_values: Dict[str, str] = field(default_factory=dict)

    @property
    def form_open(self) -> bool:
        return self.show_form or self.editing is not None

    def open_create_form(self) -> "HomeworkViewState":
        return replace(self, show_form=True, editing=None, form_values={})

    def start_edit(self, record: Homework) -> "HomeworkViewState":
        return replace(self, show_form=False, editing=record, form_values={})

    def close_form(self) -> "HomeworkViewState":
        return replace(self, show_form=False, editing=None, form_values={}, error=None)

    def with_error(self, message: str) -> "HomeworkViewState":
        return replace(self, error=message)

    # -------- liens --------

    def _url(self, **params: Any) -> str:
        query = {"date": self.selected_date.isoformat()}
        query.update({k: v for k, v in params.items() if v is not None})
        return f"?{urlencode(query)}"

    @property
    def create_url(self) -> str:
        # le bouton "Assign Homework" bascule l'ouverture du formulaire de création
        if self.show_form and self.editing is None:
            return self.cancel_url
        return self.new_form_url

    @property
    def new_form_url(self) -> str:
        return self._url(form="new")

    def edit_url(self, record: Homework) -> str:
        return self._url(edit=record.id)

    @property
    def cancel_url(self) -> str:
        return self._url()

    def field_value(self, name: str, today: date) -> str:
        """Valeur initiale d'un champ du formulaire (saisie précédente > devoir édité > défaut)."""
        if name in self.form_values:
            return self.form_values[name]
        if self.editing is not None:
            return {
                "subject": self.editing.subject,
                "description": self.editing.description,
                "assignedDate": self.editing.homework_date.isoformat(),
            }.get(name, "")
        if name == "assignedDate":
            return today.isoformat()
        return ""


def state_from_query(
    records: Sequence[Homework],
    *,
    today: date,
    date_param: Optional[str] = None,
    form_param: Optional[str] = None,
    edit_param: Optional[str] = None,
) -> HomeworkViewState:
    """
    Reconstruit l'état d'UI depuis la query string.
    `edit` l'emporte sur `form=new` ; un id inconnu est ignoré.
    """
    state = HomeworkViewState(selected_date=parse_date_or(date_param, today))
    if form_param == "new":
        state = state.open_create_form()
    if edit_param:
        try:
            record = find_by_id(records, int(edit_param))
        except ValueError:
            record = None
        if record is not None:
            state = state.start_edit(record)
    return state


def build_context(
    records: Sequence[Homework],
    state: HomeworkViewState,
    *,
    today: date,
) -> Dict[str, Any]:
    """Contexte Jinja2 de homework.html."""
    return {
        "homework": records,
        "state": state,
        "today": today,
        "stats": homework_stats(records, today),
        "selected_homework": homework_for_date(records, state.selected_date),
        "selected_date_label": format_locale_date(state.selected_date),
        "format_date_display": lambda d: format_date_display(d, today),
        "format_locale_date": format_locale_date,
    }
