"""
Base Repository

Common data access operations shared by all repositories.

Repositories only ``flush``; committing or rolling back is the caller's
job, so a service can group several repository calls into one
transaction.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlmodel import Session, SQLModel

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class with common CRUD operations.
    """

    def __init__(self, model: Type[ModelType], session: Session):
        """
        Initialize repository.

        Args:
            model: SQLModel table class
            session: Database session
        """
        self.model = model
        self.session = session

    def get_by_id(self, id: Any) -> Optional[ModelType]:
        """Get a record by primary key."""
        return self.session.get(self.model, id)

    def add(self, instance: ModelType) -> ModelType:
        """Stage a new or modified record and flush it."""
        self.session.add(instance)
        self.session.flush()
        self.session.refresh(instance)
        return instance

    def remove(self, instance: ModelType) -> None:
        """Delete a loaded record."""
        self.session.delete(instance)
        self.session.flush()
