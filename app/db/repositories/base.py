from contextlib import contextmanager
from typing import Any, Generic, Iterator, Optional, Type, TypeVar
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, Session, select, func

# Type générique pour le modèle (User, Homework, etc.)
ModelT = TypeVar("ModelT", bound=SQLModel)


class StoreError(Exception):
    """
    Échec d'un appel à la base (connexion, contrainte, type invalide...).
    `message` porte le message du driver, renvoyé tel quel au client.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BaseRepository(Generic[ModelT]):
    """
    Repository de base pour les opérations CRUD standards.

    👉 Ne contient aucune logique métier.
    👉 Gère la persistance générique : create, get, count.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    @contextmanager
    def _store_call(self) -> Iterator[None]:
        """
        Transforme toute erreur SQLAlchemy en StoreError après rollback,
        pour que la session reste utilisable dans la suite de la requête.
        """
        try:
            yield
        except SQLAlchemyError as e:
            self.session.rollback()
            orig = getattr(e, "orig", None)
            raise StoreError(str(orig) if orig is not None else str(e)) from e

    # ---------- READ ----------

    def count(self) -> int:
        """Retourne le nombre total d’enregistrements."""
        return self.session.exec(select(func.count(self.model.id))).one()

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None."""
        return self.session.get(self.model, id_)

    # ---------- CREATE ----------

    def create(self, **fields) -> ModelT:
        """Crée et persiste un nouvel enregistrement."""
        entity = self.model(**fields)
        self.session.add(entity)
        self.session.commit()
        self.session.refresh(entity)
        return entity
