"""
Reset Code Repository

Data access layer for ResetCodePassword (the reset code store).
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete
from sqlmodel import Session, select

from storefront.repositories.base import BaseRepository
from storefront.models.reset_code import ResetCodePassword


class ResetCodeRepository(BaseRepository[ResetCodePassword]):
    """Repository for ResetCodePassword model."""

    def __init__(self, session: Session):
        super().__init__(ResetCodePassword, session)

    def find_by_code(self, code: str, for_update: bool = False) -> Optional[ResetCodePassword]:
        """
        Find a reset code by its token.

        Args:
            code: The reset code
            for_update: Lock the row until the transaction ends
                (ignored by backends without row locks, e.g. SQLite)
        """
        query = select(ResetCodePassword).where(ResetCodePassword.code == code)
        if for_update:
            query = query.with_for_update()
        return self.session.exec(query).first()

    def exists(self, code: str) -> bool:
        return self.find_by_code(code) is not None

    def create(self, *, code: str, email: str, created_at: datetime) -> ResetCodePassword:
        return self.add(ResetCodePassword(code=code, email=email, created_at=created_at))

    def delete_by_code(self, code: str) -> bool:
        """
        Delete a reset code.

        Returns:
            True only if this call removed the row; False when it was
            already gone (e.g. consumed by a concurrent request).
        """
        result = self.session.exec(delete(ResetCodePassword).where(ResetCodePassword.code == code))
        return result.rowcount == 1

    def delete_by_email(self, email: str) -> int:
        """Delete every reset code issued for an email. Returns the count."""
        result = self.session.exec(delete(ResetCodePassword).where(ResetCodePassword.email == email))
        return result.rowcount
