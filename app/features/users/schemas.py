"""
➡️ But : Format de sortie d'un compte (jamais le hash du mot de passe).
"""

from sqlmodel import SQLModel

class UserOut(SQLModel):
    id: int
    username: str
    admin: bool
