"""
➡️ But : Remplir une base vide (comptes admin + quelques devoirs) depuis un YAML.

Format attendu :

users:
  - username: admin
    password: change-me
    admin: true
homework:
  - subject: Math
    description: Pages 1-10
    homework_date: 2024-01-15
"""

import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

import yaml
from sqlmodel import Session

from app.db.repositories.homework import HomeworkRepository
from app.db.repositories.users import UserRepository
from app.security.password import hash_password

logger = logging.getLogger(__name__)


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML introuvable: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Le YAML de seed doit contenir un objet racine (mapping).")
    return data


def _as_date(value: Any) -> date:
    # PyYAML convertit déjà 2024-01-15 en date ; on accepte aussi une chaîne
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


# -----------------------------
# Seeders
# -----------------------------
def seed_users(session: Session, users_yaml: List[Dict[str, Any]]) -> int:
    repo = UserRepository(session)
    created = 0
    for u in users_yaml:
        if repo.get_by_username(u["username"]):
            logger.info("User %s already exists, skipped", u["username"])
            continue
        repo.create(
            username=u["username"],
            hashed_password=hash_password(u["password"]),
            admin=bool(u.get("admin", False)),
        )
        created += 1
    return created


def seed_homework(session: Session, homework_yaml: List[Dict[str, Any]]) -> int:
    repo = HomeworkRepository(session)
    if repo.count():
        logger.info("Homework table not empty, skipped")
        return 0
    for h in homework_yaml:
        now = datetime.now(timezone.utc)
        repo.create_homework(
            subject=h["subject"],
            description=h["description"],
            homework_date=_as_date(h["homework_date"]),
            created_at=now,
            updated_at=now,
        )
    return len(homework_yaml)


def seed_all(session: Session, data: Dict[str, Any]) -> Dict[str, int]:
    counts = {
        "users": seed_users(session, data.get("users", [])),
        "homework": seed_homework(session, data.get("homework", [])),
    }
    logger.info("Seed done: %s", counts)
    return counts
