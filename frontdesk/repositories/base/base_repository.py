"""
Base repository with standardized CRUD operations and error handling.

Provides the foundation for all front desk repositories. Repositories never
commit: the Unit of Work owns the transaction, repositories only flush.
Database failures surface as RemoteServiceError.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from frontdesk.core.exceptions import RemoteServiceError, ResourceNotFoundError
from frontdesk.core.logging import get_logger
from frontdesk.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Abstract base repository with standardized operations.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    def _store_error(self, action: str, exc: SQLAlchemyError) -> RemoteServiceError:
        logger.error(
            f"{self.model.__name__} {action} failed: {exc}",
            extra={"model": self.model.__name__, "action": action},
        )
        return RemoteServiceError(
            f"{self.model.__name__} {action} failed",
            service_name=self.model.__tablename__,
            original_error=exc,
        )

    # ==================== Create Operations ====================

    def create(self, entity: ModelType) -> ModelType:
        """
        Add a new entity and flush it so defaults are populated.

        Raises:
            RemoteServiceError: If the store rejects the insert
        """
        try:
            self.db.add(entity)
            self.db.flush()
        except SQLAlchemyError as e:
            raise self._store_error("create", e) from e
        logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
        return entity

    # ==================== Read Operations ====================

    def get_by_id(self, entity_id: str, for_update: bool = False) -> Optional[ModelType]:
        """
        Get entity by primary key.

        Args:
            entity_id: Primary key
            for_update: Lock the row (SELECT ... FOR UPDATE) for the
                rest of the transaction

        Returns:
            Entity or None
        """
        stmt = select(self.model).where(self.model.id == entity_id)
        if for_update:
            stmt = stmt.with_for_update()
        try:
            return self.db.execute(stmt).scalars().first()
        except SQLAlchemyError as e:
            raise self._store_error("read", e) from e

    def get_or_raise(self, entity_id: str, for_update: bool = False) -> ModelType:
        """Get entity by primary key or raise ResourceNotFoundError."""
        entity = self.get_by_id(entity_id, for_update=for_update)
        if entity is None:
            raise ResourceNotFoundError(self.model.__name__, entity_id)
        return entity

    def find(self, stmt) -> List[ModelType]:
        """Run a select statement and return the entities."""
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise self._store_error("query", e) from e

    def count_by(self, column) -> Dict[Any, int]:
        """Count rows grouped by a column."""
        stmt = select(column, func.count()).group_by(column)
        try:
            return {key: int(total) for key, total in self.db.execute(stmt).all()}
        except SQLAlchemyError as e:
            raise self._store_error("count", e) from e

    # ==================== Update Operations ====================

    def update(self, entity: ModelType, data: Dict[str, Any]) -> ModelType:
        """
        Apply field values to an entity and flush.

        Args:
            entity: Entity to update
            data: Field values to apply (unknown keys are ignored)
        """
        for key, value in data.items():
            if hasattr(entity, key):
                setattr(entity, key, value)
        try:
            self.db.flush()
        except SQLAlchemyError as e:
            raise self._store_error("update", e) from e
        return entity

    # ==================== Delete Operations ====================

    def delete(self, entity: ModelType) -> None:
        try:
            self.db.delete(entity)
            self.db.flush()
        except SQLAlchemyError as e:
            raise self._store_error("delete", e) from e
        logger.info(f"Deleted {self.model.__name__} with id: {entity.id}")
