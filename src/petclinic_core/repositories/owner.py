"""
Owner repository.
"""

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.session import SessionManager
from ..exceptions import ValidationException
from ..models.owner import Owner
from .base import BaseRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("first_name", "last_name", "address_city", "address_first_line", "telephone")


class OwnerRepository(BaseRepository[Owner]):
    """Reads and writes owners."""

    model = Owner

    def __init__(self, session_manager: SessionManager, case_sensitive: bool = False):
        """
        Initialize the repository.

        Args:
            session_manager: Source of units of work
            case_sensitive: Whether last-name searches distinguish case
        """
        super().__init__(session_manager)
        self.case_sensitive = case_sensitive

    async def find_by_last_name(self, last_name: Optional[str]) -> List[Owner]:
        """
        Find owners whose last name starts with the given text.

        An empty or missing fragment matches every owner. No match yields an
        empty list, never an error.

        Args:
            last_name: Prefix of the last name to search for

        Returns:
            Matching owners ordered by last name, first name and id
        """
        fragment = last_name or ""
        stmt = select(Owner)

        if fragment:
            if self.case_sensitive:
                # LIKE ignores case on SQLite, so compare the prefix exactly
                stmt = stmt.where(
                    func.substr(Owner.last_name, 1, len(fragment)) == fragment
                )
            else:
                stmt = stmt.where(Owner.last_name.istartswith(fragment, autoescape=True))

        stmt = stmt.order_by(Owner.last_name, Owner.first_name, Owner.id)

        async with self._unit_of_work("find_by_last_name") as session:
            owners = list((await session.scalars(stmt)).all())

        logger.debug(f"Found {len(owners)} owners for last name '{fragment}'")
        return owners

    async def _validate(self, session: AsyncSession, owner: Owner) -> None:
        for field in REQUIRED_FIELDS:
            value = getattr(owner, field)
            if value is None or not str(value).strip():
                raise ValidationException(
                    f"Owner {field} is required", field=field, value=value
                )
