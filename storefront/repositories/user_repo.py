"""
User Repository

Data access layer for User (the credential store).
"""

from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from storefront.repositories.base import BaseRepository
from storefront.models.base import utcnow
from storefront.models.user import User


class UserRepository(BaseRepository[User]):
    """Repository for User model."""

    def __init__(self, session: Session):
        super().__init__(User, session)

    def find_by_email(self, email: str, for_update: bool = False) -> Optional[User]:
        """
        Look up a user by email, ignoring case.

        Rows created before emails were normalized may hold mixed case,
        so both sides are lowered. ``for_update`` locks the row until the
        caller commits or rolls back.
        """
        statement = select(User).where(func.lower(User.email) == email.strip().lower())
        if for_update:
            statement = statement.with_for_update()
        return self.session.exec(statement).first()

    def update_password_hash(self, user: User, password_hash: str) -> User:
        """Replace the stored hash for a user."""
        user.password_hash = password_hash
        user.updated_at = utcnow()
        return self.add(user)
