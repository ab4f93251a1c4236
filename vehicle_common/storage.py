"""Relational persistence for the vehicle expense core services."""

from __future__ import annotations

import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator

from sqlalchemy import Column, Date, DateTime, Enum, Numeric, String, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .exceptions import PersistenceError
from .models import Expense, ExpenseType

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(dt: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class ExpenseRecord(Base):
    __tablename__ = "expenses"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    amount = Column(Numeric(10, 2), nullable=False)
    type = Column(
        Enum(
            ExpenseType,
            name="expense_type",
            native_enum=False,
            length=20,
            values_callable=lambda enum: [member.value for member in enum],
            validate_strings=True,
        ),
        nullable=False,
    )
    date = Column(Date, nullable=False, index=True)
    description = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    def to_expense(self) -> Expense:
        """Convert storage-native decimals and datetimes to plain values."""
        return Expense(
            id=self.id,
            amount=float(self.amount),
            type=ExpenseType(self.type),
            date=self.date,
            description=self.description,
            created_at=_as_utc(self.created_at),
            updated_at=_as_utc(self.updated_at),
        )


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/").endswith(":"))


class Database:
    """Owns the SQLAlchemy engine and hands out short-lived sessions."""

    def __init__(self, url: str, *, echo: bool = False) -> None:
        options: Dict[str, Any] = {"echo": echo}
        if _is_memory_sqlite(url):
            # Every session must see the same in-memory database.
            options["connect_args"] = {"check_same_thread": False}
            options["poolclass"] = StaticPool
        self._url = url
        self._engine = create_engine(url, **options)
        self._session_factory = sessionmaker(
            bind=self._engine, expire_on_commit=False, autoflush=False
        )

    def create_all(self) -> None:
        try:
            Base.metadata.create_all(self._engine)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Unable to initialise database at {self._url}") from exc

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session that commits on success and rolls back on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise PersistenceError("Database operation failed") from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        self._engine.dispose()

    @property
    def url(self) -> str:
        return self._url
