"""Deal storage behind an injected repository interface.

The metrics engine never touches storage; callers load deals here and hand
plain VehicleDeal values to the engine.
"""

import logging
import uuid
from dataclasses import asdict, fields, replace
from typing import Protocol

from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker

from src.models.db import Base, DealRecord
from src.models.deal import VehicleDeal

logger = logging.getLogger(__name__)

_DEAL_FIELDS = [f.name for f in fields(VehicleDeal)]


class DealNotFoundError(KeyError):
    """No stored deal with the requested id."""


class DealRepository(Protocol):
    """Deal store. ``list`` returns deals in the order they were first saved."""

    def list(self) -> list[VehicleDeal]: ...

    def get(self, deal_id: str) -> VehicleDeal: ...

    def save(self, deal: VehicleDeal) -> VehicleDeal: ...

    def delete(self, deal_id: str) -> None: ...


def _with_id(deal: VehicleDeal) -> VehicleDeal:
    return deal if deal.id else replace(deal, id=str(uuid.uuid4()))


class InMemoryDealRepository:
    """Dict-backed repository for tests and single-process use."""

    def __init__(self, deals: list[VehicleDeal] | None = None) -> None:
        self._deals: dict[str, VehicleDeal] = {}
        for deal in deals or []:
            self.save(deal)

    def list(self) -> list[VehicleDeal]:
        return list(self._deals.values())

    def get(self, deal_id: str) -> VehicleDeal:
        try:
            return self._deals[deal_id]
        except KeyError:
            raise DealNotFoundError(deal_id) from None

    def save(self, deal: VehicleDeal) -> VehicleDeal:
        deal = _with_id(deal)
        self._deals[deal.id] = deal
        return deal

    def delete(self, deal_id: str) -> None:
        if self._deals.pop(deal_id, None) is None:
            raise DealNotFoundError(deal_id)


def _record_to_deal(record: DealRecord) -> VehicleDeal:
    return VehicleDeal(**{name: getattr(record, name) for name in _DEAL_FIELDS})


class SqlDealRepository:
    """SQLAlchemy-backed repository. Any SQLAlchemy URL works; SQLite by default."""

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self._engine = create_engine(url, echo=echo)
        Base.metadata.create_all(self._engine)
        self._session_factory = sessionmaker(self._engine, expire_on_commit=False)

    def list(self) -> list[VehicleDeal]:
        with self._session_factory() as session:
            records = session.execute(
                select(DealRecord).order_by(DealRecord.seq.asc())
            ).scalars()
            return [_record_to_deal(r) for r in records]

    def get(self, deal_id: str) -> VehicleDeal:
        with self._session_factory() as session:
            record = session.get(DealRecord, deal_id)
            if record is None:
                raise DealNotFoundError(deal_id)
            return _record_to_deal(record)

    def save(self, deal: VehicleDeal) -> VehicleDeal:
        deal = _with_id(deal)
        values = asdict(deal)
        with self._session_factory() as session:
            record = session.get(DealRecord, deal.id)
            if record is None:
                next_seq = session.scalar(select(func.coalesce(func.max(DealRecord.seq), 0))) + 1
                session.add(DealRecord(seq=next_seq, **values))
                logger.debug("Inserted deal %s", deal.id)
            else:
                for name, value in values.items():
                    setattr(record, name, value)
                logger.debug("Updated deal %s", deal.id)
            session.commit()
        return deal

    def delete(self, deal_id: str) -> None:
        with self._session_factory() as session:
            record = session.get(DealRecord, deal_id)
            if record is None:
                raise DealNotFoundError(deal_id)
            session.delete(record)
            session.commit()
        logger.debug("Deleted deal %s", deal_id)
