"""
➡️ But : Table `homework` (un devoir = matière + consigne + date).

`homework_date` est la date à laquelle le devoir s'applique, pas sa date de création.
Plus de colonne `status` : le suivi pending/completed a été retiré du modèle.
"""

from datetime import date

from sqlmodel import Field

from .base import BaseModelDB

class Homework(BaseModelDB, table=True):
    subject: str
    description: str
    homework_date: date = Field(index=True)
