"""
➡️ But : Ouvrir une session admin et retrouver l'utilisateur derrière un token.

AuthService orchestre UserRepository + tokens JWT. Il lève des exceptions
métier (NotAuthenticated, NotAdmin) que la couche web traduit en redirection / 401 / 403.
"""

import logging
from typing import Optional

from jose import JWTError

from app.db.models.users import User
from app.db.repositories.users import UserRepository
from app.features.authentication.schemas import SignInIn, SessionOut
from app.security.password import verify_password
from app.security.tokens import JWTSettings, create_session_token, decode_token

logger = logging.getLogger(__name__)


class NotAuthenticated(Exception):
    """Pas de session valide (token absent, illisible, expiré ou compte supprimé)."""

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(detail)
        self.detail = detail


class NotAdmin(Exception):
    """Session valide mais compte sans le flag admin."""


class AuthService:
    """
    Service d'authentification : orchestre le repository + tokens.
    Ne contient pas d'accès SQL direct.
    """

    def __init__(self, *, user_repo: UserRepository, jwt_settings: JWTSettings):
        self.user_repo = user_repo
        self.jwt = jwt_settings

    # ---------- Sign in ----------
    def sign_in(self, payload: SignInIn) -> SessionOut:
        user = self.user_repo.get_by_username(payload.username)
        if not user or not verify_password(payload.password, user.hashed_password):
            # Ne pas révéler si l'utilisateur existe
            logger.warning("Failed sign-in for username=%r", payload.username)
            raise NotAuthenticated("Invalid credentials")

        token = create_session_token(user_id=user.id, username=user.username, settings=self.jwt)
        logger.info("User %s signed in", user.username)
        return SessionOut(
            session_token=token,
            expires_in=int(self.jwt.session_ttl.total_seconds()),
        )

    # ---------- Current user depuis le token de session ----------
    def get_current_user(self, *, session_token: Optional[str]) -> User:
        if not session_token:
            raise NotAuthenticated()
        try:
            decoded = decode_token(session_token, self.jwt)
        except JWTError:
            raise NotAuthenticated("Invalid token")

        if decoded.get("typ") != "session":
            raise NotAuthenticated("Invalid token type")

        try:
            user = self.user_repo.get(int(decoded["sub"]))
        except (KeyError, ValueError):
            raise NotAuthenticated("Invalid token")
        if not user:
            raise NotAuthenticated("User not found")
        return user

    # ---------- Garde admin ----------
    def require_admin(self, *, session_token: Optional[str]) -> User:
        user = self.get_current_user(session_token=session_token)
        if not user.admin:
            logger.warning("User %s denied admin access", user.username)
            raise NotAdmin()
        return user
