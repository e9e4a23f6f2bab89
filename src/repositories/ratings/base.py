"""Persistence for the output tables of a rating run."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

SystemModelT = TypeVar("SystemModelT")
DomainEventT = TypeVar("DomainEventT")
LeaderboardT = TypeVar("LeaderboardT")
AuditT = TypeVar("AuditT")


class BaseRatingRepository(Generic[SystemModelT, DomainEventT, LeaderboardT, AuditT]):
    """Writes one run's events, leaderboard and audit rows under a system row."""

    def __init__(
        self,
        *,
        system_model: type[SystemModelT],
        event_model: type[Any],
        leaderboard_model: type[Any],
        audit_model: type[Any],
        system_id_column: str,
        entity_id_column: str,
        event_to_row: Callable[[DomainEventT, int], dict[str, Any]],
        leaderboard_to_row: Callable[[LeaderboardT, int], dict[str, Any]],
        audit_to_row: Callable[[AuditT, int, int], dict[str, Any]],
    ) -> None:
        self.system_model = system_model
        self.event_model = event_model
        self.leaderboard_model = leaderboard_model
        self.audit_model = audit_model
        self.system_id_column = system_id_column
        self.entity_id_column = entity_id_column
        self.event_to_row = event_to_row
        self.leaderboard_to_row = leaderboard_to_row
        self.audit_to_row = audit_to_row

    def _output_models(self) -> tuple[type[Any], ...]:
        return (self.event_model, self.leaderboard_model, self.audit_model)

    def ensure_schema(self, engine: Engine) -> None:
        """Create required tables and indexes when missing."""
        with engine.begin() as connection:
            system_table = getattr(self.system_model, "__table__")
            system_table.create(bind=connection, checkfirst=True)
            for model in self._output_models():
                getattr(model, "__table__").create(bind=connection, checkfirst=True)

    def upsert_system(
        self,
        session: Session,
        *,
        name: str,
        description: str | None,
        config_json: dict[str, Any],
    ) -> SystemModelT:
        """Create or update the system metadata row."""
        name_column = getattr(self.system_model, "name")
        system = session.execute(select(self.system_model).where(name_column == name)).scalar_one_or_none()
        if system is None:
            system = self.system_model(  # type: ignore[call-arg]
                name=name,
                description=description,
                config_json=config_json,
            )
            session.add(system)
        else:
            setattr(system, "description", description)
            setattr(system, "config_json", config_json)
            if hasattr(system, "updated_at"):
                setattr(system, "updated_at", datetime.now(UTC).replace(tzinfo=None))
        session.flush()
        return system

    def delete_rows_for_system(self, session: Session, system_id: int) -> None:
        """Delete every output row of a previous run of one system."""
        for model in self._output_models():
            system_column = getattr(model, self.system_id_column)
            session.execute(delete(model).where(system_column == system_id))

    def insert_events(self, session: Session, events: Sequence[DomainEventT], *, system_id: int) -> None:
        if not events:
            return
        payload = [self.event_to_row(event, system_id) for event in events]
        session.execute(insert(self.event_model), payload)

    def insert_leaderboard(
        self,
        session: Session,
        entries: Sequence[LeaderboardT],
        *,
        system_id: int,
    ) -> None:
        if not entries:
            return
        payload = [self.leaderboard_to_row(entry, system_id) for entry in entries]
        session.execute(insert(self.leaderboard_model), payload)

    def insert_audit(self, session: Session, entries: Sequence[AuditT], *, system_id: int) -> None:
        """Insert audit rows, keeping their sorted position."""
        if not entries:
            return
        payload = [
            self.audit_to_row(entry, position, system_id)
            for position, entry in enumerate(entries, start=1)
        ]
        session.execute(insert(self.audit_model), payload)

    def count_tracked_entities(self, session: Session, *, system_id: int | None = None) -> int:
        """Count distinct rated players for one system or all systems."""
        entity_column = getattr(self.event_model, self.entity_id_column)
        statement = select(func.count(func.distinct(entity_column)))

        if system_id is not None:
            system_column = getattr(self.event_model, self.system_id_column)
            statement = statement.where(system_column == system_id)

        result = session.scalar(statement)
        return int(result or 0)
