"""
➡️ But : Table des comptes pouvant ouvrir une session.

Seuls les comptes `admin=True` passent le garde d'accès de l'écran devoirs.
"""

from sqlmodel import Field

from .base import BaseModelDB

class User(BaseModelDB, table=True):
    username: str = Field(index=True, unique=True)
    hashed_password: str
    admin: bool = Field(default=False)
