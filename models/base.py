"""
Defines the declarative base and shared column types for the ORM tables.

The repositories issue SQLAlchemy Core statements against these tables; the
declarative classes exist so that the schema is declared once and can be
created with ``Base.metadata.create_all``.
"""

from datetime import datetime

from sqlalchemy import Column, DateTime, SmallInteger, TypeDecorator
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class IntFlag(TypeDecorator):
    """
    Boolean stored as a 0/1 integer column.

    MySQL has no native boolean; flags are written as ``0``/``1`` and read back
    as genuine ``bool`` values regardless of what the driver hands over.
    """
    impl = SmallInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return value
        return 1 if value else 0

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        return bool(value)


class BaseModel(Base):
    """
    Base model class for database entities.

    :ivar creation_date: Timestamp representing when the record was created.
    :type creation_date: datetime
    """
    __abstract__ = True

    creation_date = Column(DateTime, nullable=False, default=datetime.utcnow)
