"""
Visit model for the petclinic-core package.
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class Visit(BaseModel):
    """
    A single visit of a pet to the clinic.

    A new visit (no id) is dated "now" unless a date is given. The owning pet is
    referenced by ``pet_id``; use ``Pet.add_visit`` to keep both sides in step.
    """

    __tablename__ = "visits"

    def __init__(self, **kwargs: Any) -> None:
        """Initialize Visit, dating a new visit at the current time."""
        if kwargs.get("date") is None:
            kwargs.pop("date", None)
            if kwargs.get("id") is None:
                kwargs["date"] = datetime.now()

        super().__init__(**kwargs)

    date: Mapped[datetime] = mapped_column(
        "visit_date",
        DateTime,
        nullable=False,
        comment="When the visit took place",
    )

    description: Mapped[str] = mapped_column(
        String(255), nullable=False, comment="What was done during the visit"
    )

    pet_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("pets.id"),
        nullable=False,
        index=True,
        comment="Pet that was seen",
    )

    __table_args__ = (
        CheckConstraint("length(description) > 0", name="description_not_empty"),
    )

    def __repr__(self) -> str:
        return f"<Visit(id={self.id}, pet_id={self.pet_id}, date={self.date})>"
