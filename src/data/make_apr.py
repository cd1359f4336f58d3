"""Manufacturer promotional APR table, keyed by make and term length.

Lookups ignore case and surrounding whitespace in the make. Saving a rate
replaces any existing rate for the same make/term.
"""

import logging
from typing import Protocol

from sqlalchemy import create_engine, delete, select
from sqlalchemy.orm import sessionmaker

from src.models.db import Base, MakeAprRateRecord
from src.models.deal import MakeAprRate, normalize_make

logger = logging.getLogger(__name__)


class MakeAprStore(Protocol):
    def all_rates(self) -> list[MakeAprRate]: ...

    def get_rate(self, make: str, term_length: int) -> float | None: ...

    def rates_for_make(self, make: str) -> list[MakeAprRate]: ...

    def save_rate(self, rate: MakeAprRate) -> MakeAprRate: ...

    def delete_rate(self, make: str, term_length: int) -> bool: ...


class InMemoryMakeAprStore:
    def __init__(self) -> None:
        self._rates: dict[tuple[str, int], MakeAprRate] = {}

    def all_rates(self) -> list[MakeAprRate]:
        return list(self._rates.values())

    def get_rate(self, make: str, term_length: int) -> float | None:
        rate = self._rates.get((normalize_make(make), term_length))
        return rate.apr if rate else None

    def rates_for_make(self, make: str) -> list[MakeAprRate]:
        key = normalize_make(make)
        return sorted(
            (r for r in self._rates.values() if normalize_make(r.make) == key),
            key=lambda r: r.term_length,
        )

    def save_rate(self, rate: MakeAprRate) -> MakeAprRate:
        rate = MakeAprRate(make=rate.make.strip(), term_length=rate.term_length, apr=rate.apr)
        self._rates[rate.key] = rate
        return rate

    def delete_rate(self, make: str, term_length: int) -> bool:
        return self._rates.pop((normalize_make(make), term_length), None) is not None


class SqlMakeAprStore:
    def __init__(self, url: str, *, echo: bool = False) -> None:
        self._engine = create_engine(url, echo=echo)
        Base.metadata.create_all(self._engine)
        self._session_factory = sessionmaker(self._engine, expire_on_commit=False)

    @staticmethod
    def _to_rate(record: MakeAprRateRecord) -> MakeAprRate:
        return MakeAprRate(make=record.make, term_length=record.term_length, apr=record.apr)

    def all_rates(self) -> list[MakeAprRate]:
        with self._session_factory() as session:
            records = session.execute(
                select(MakeAprRateRecord).order_by(MakeAprRateRecord.make_key, MakeAprRateRecord.term_length)
            ).scalars()
            return [self._to_rate(r) for r in records]

    def _find(self, session, make: str, term_length: int) -> MakeAprRateRecord | None:
        return session.execute(
            select(MakeAprRateRecord).where(
                MakeAprRateRecord.make_key == normalize_make(make),
                MakeAprRateRecord.term_length == term_length,
            )
        ).scalar_one_or_none()

    def get_rate(self, make: str, term_length: int) -> float | None:
        with self._session_factory() as session:
            record = self._find(session, make, term_length)
            return record.apr if record else None

    def rates_for_make(self, make: str) -> list[MakeAprRate]:
        with self._session_factory() as session:
            records = session.execute(
                select(MakeAprRateRecord)
                .where(MakeAprRateRecord.make_key == normalize_make(make))
                .order_by(MakeAprRateRecord.term_length)
            ).scalars()
            return [self._to_rate(r) for r in records]

    def save_rate(self, rate: MakeAprRate) -> MakeAprRate:
        with self._session_factory() as session:
            record = self._find(session, rate.make, rate.term_length)
            if record is None:
                record = MakeAprRateRecord(
                    make=rate.make.strip(),
                    make_key=normalize_make(rate.make),
                    term_length=rate.term_length,
                    apr=rate.apr,
                )
                session.add(record)
            else:
                record.make = rate.make.strip()
                record.apr = rate.apr
            session.commit()
            logger.debug("Saved %s %dm APR %.4f", record.make, record.term_length, record.apr)
            return self._to_rate(record)

    def delete_rate(self, make: str, term_length: int) -> bool:
        with self._session_factory() as session:
            result = session.execute(
                delete(MakeAprRateRecord).where(
                    MakeAprRateRecord.make_key == normalize_make(make),
                    MakeAprRateRecord.term_length == term_length,
                )
            )
            session.commit()
            return result.rowcount > 0
