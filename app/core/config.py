"""
➡️ But : Centraliser tous les paramètres configurables (nom d’app, chemin DB, secrets, fuseau horaire, etc.)

Utilise pydantic-settings pour charger automatiquement les variables d’environnement (.env, variables système…).

Fournit un objet settings unique, que tu importes ailleurs :

from app.core.config import settings
print(settings.APP_NAME)


🔹 Avantages :

Plus propre que des constantes éparpillées dans le code.

Facilite le passage entre environnements (dev / prod / test).
"""

from datetime import timedelta
from typing import Optional

from pydantic_settings import BaseSettings
from app.security.tokens import JWTSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "Homework Admin"
    ENV: str = "dev"  # dev | prod | test
    LOG_LEVEL: Optional[str] = None  # auto selon ENV si None

    # -----------------------------
    # DB
    # -----------------------------
    SQLITE_PATH: str = "homework.db"  # fichier SQLite
    # Base hébergée (ex: Postgres) : définir DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None

    # -----------------------------
    # JWT / Session admin
    # -----------------------------
    JWT_SECRET_KEY: str = "CHANGE_ME"     # ⚠️ change en prod
    JWT_ISSUER: str = "homework-admin"
    JWT_ALGORITHM: str = "HS256"
    SESSION_TTL_HOURS: int = 12

    # Cookie de session
    SESSION_COOKIE_NAME: str = "session"
    SESSION_COOKIE_SAMESITE: str = "lax"     # "lax" | "strict" | "none"
    SESSION_COOKIE_SECURE: Optional[bool] = None   # auto selon ENV si None

    # -----------------------------
    # Affichage
    # -----------------------------
    TIMEZONE: str = "UTC"  # nom IANA, sert à calculer "aujourd'hui"
    DATE_DISPLAY_FORMAT: str = "{month}/{day}/{year}"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

        # Cookie secure auto: true en prod si non spécifié
        if self.SESSION_COOKIE_SECURE is None:
            object.__setattr__(self, "SESSION_COOKIE_SECURE", self.ENV == "prod")

        if self.LOG_LEVEL is None:
            object.__setattr__(self, "LOG_LEVEL", "DEBUG" if self.ENV == "dev" else "INFO")


# Instance globale importable partout
settings = Settings()

# Objet JWT prêt à l'emploi pour les services
jwt_settings = JWTSettings(
    secret=settings.JWT_SECRET_KEY,
    issuer=settings.JWT_ISSUER,
    algorithm=settings.JWT_ALGORITHM,
    session_ttl=timedelta(hours=settings.SESSION_TTL_HOURS),
)
