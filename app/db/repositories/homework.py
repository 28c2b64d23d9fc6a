"""
➡️ But : Accès à la table `homework`.

Chaque méthode = un seul appel à la base, sans retry.
Les échecs remontent en StoreError (voir BaseRepository._store_call).

update/delete sont des requêtes inconditionnelles filtrées sur l'id :
pas de contrôle de version, le dernier qui écrit gagne, un id absent ne touche rien.
"""

from datetime import date, datetime
from typing import Sequence

from sqlalchemy import delete, update
from sqlmodel import select

from app.db.repositories.base import BaseRepository
from app.db.models.homework import Homework


class HomeworkRepository(BaseRepository[Homework]):
    model = Homework

    def list_by_date_desc(self) -> Sequence[Homework]:
        """Tous les devoirs, `homework_date` décroissante."""
        with self._store_call():
            return self.session.exec(
                select(Homework).order_by(Homework.homework_date.desc(), Homework.id.desc())
            ).all()

    def create_homework(
        self,
        *,
        subject: str,
        description: str,
        homework_date: date,
        created_at: datetime,
        updated_at: datetime,
    ) -> Homework:
        with self._store_call():
            return self.create(
                subject=subject,
                description=description,
                homework_date=homework_date,
                created_at=created_at,
                updated_at=updated_at,
            )

    def update_homework(
        self,
        homework_id: int,
        *,
        subject: str,
        description: str,
        homework_date: date,
        updated_at: datetime,
    ) -> None:
        with self._store_call():
            self.session.exec(
                update(Homework)
                .where(Homework.id == homework_id)
                .values(
                    subject=subject,
                    description=description,
                    homework_date=homework_date,
                    updated_at=updated_at,
                )
            )
            self.session.commit()

    def delete_homework(self, homework_id: int) -> None:
        with self._store_call():
            self.session.exec(delete(Homework).where(Homework.id == homework_id))
            self.session.commit()
