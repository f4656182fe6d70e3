"""
Base model class for all SQLAlchemy models in the petclinic-core package.

This module provides the declarative base and the abstract model every entity
inherits from. Entities carry an integer identifier assigned by the datastore
on first insert; an entity whose ``id`` is ``None`` has never been persisted.

Example:
    >>> from petclinic_core.models.base import BaseModel
    >>> from sqlalchemy.orm import Mapped, mapped_column
    >>> from sqlalchemy import String

    >>> class Clinic(BaseModel):
    ...     __tablename__ = "clinics"
    ...     name: Mapped[str] = mapped_column(String(80))

    >>> clinic = Clinic(name="Madison")
    >>> clinic.is_new()
    True
    >>> clinic.to_dict()
    {'id': None, 'name': 'Madison'}
"""

from datetime import date, datetime
from typing import Any, Dict

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Constraint names are fixed so that the Alembic migration and
# ``metadata.create_all`` produce the same schema.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """
    Base declarative class for all SQLAlchemy models.

    Attributes:
        metadata: Shared metadata with a deterministic naming convention
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class BaseModel(Base):
    """
    Abstract base model class providing common functionality for all entities.

    Attributes:
        id (int, optional): Primary key, assigned by the datastore on insert

    Note:
        This is an abstract base class and cannot be instantiated directly.
        All concrete models must define a __tablename__ attribute.
    """

    __abstract__ = True

    # Non-nullable so multi-row inserts can batch; None until the first flush
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    def __repr__(self) -> str:
        """
        Return string representation of the model instance.

        Returns:
            String in format: <ModelName(id=1)>
        """
        return f"<{self.__class__.__name__}(id={self.id})>"

    def is_new(self) -> bool:
        """Return True when the entity has not been persisted yet."""
        return self.id is None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert model instance to dictionary representation.

        Keys are mapped attribute names (not column names), so a Visit yields
        ``date`` rather than ``visit_date``. Dates and datetimes are converted
        to ISO format strings.

        Returns:
            Dictionary with attribute names as keys and serialized values.
        """
        result: Dict[str, Any] = {}
        for attr in self.__mapper__.column_attrs:
            value = getattr(self, attr.key)
            if isinstance(value, (datetime, date)):
                result[attr.key] = value.isoformat()
            else:
                result[attr.key] = value
        return result
