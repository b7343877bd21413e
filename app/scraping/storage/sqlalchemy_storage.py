"""
SQLAlchemy-backed scrape record store.
"""

from __future__ import annotations

import threading

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.domain.price_scraping import ScrapeRecord, now_millis as current_millis
from app.scraping.storage.base import ScrapeRecordStore
from db.base import Base
from db.models.scrape_record import ScrapeRecordRow
from db.session import create_db_engine, create_session_factory


class SQLAlchemyScrapeRecordStore(ScrapeRecordStore):
    """
    Persist scrape records in the ``scraped_data`` table.

    The default ``sqlite://`` URL keeps the table in memory for the life of
    the process.
    """

    def __init__(self, *, database_url: str = "sqlite://", engine: Engine | None = None) -> None:
        self._engine = engine or create_db_engine(database_url)
        Base.metadata.create_all(self._engine, tables=[ScrapeRecordRow.__table__])
        self._session_factory = create_session_factory(self._engine)
        self._lock = threading.Lock()

    def lookup_fresh(
        self,
        url: str,
        max_age_millis: int,
        *,
        now_millis: int | None = None,
    ) -> ScrapeRecord | None:
        reference = current_millis() if now_millis is None else now_millis
        threshold = reference - max_age_millis
        conditions = [ScrapeRecordRow.url == url]
        # A window reaching past the epoch covers every row.
        if threshold >= 0:
            conditions.append(ScrapeRecordRow.last_updated > threshold)
        statement = (
            select(ScrapeRecordRow)
            .where(*conditions)
            .order_by(ScrapeRecordRow.id.desc())
            .limit(1)
        )
        with self._lock, self._session_factory() as session:
            row = session.scalars(statement).first()
            return _to_record(row) if row is not None else None

    def append(self, record: ScrapeRecord) -> ScrapeRecord:
        row = ScrapeRecordRow(
            url=record.url,
            domain=record.domain,
            price=record.price,
            success=record.success,
            last_updated=record.last_updated,
        )
        with self._lock, self._session_factory() as session:
            try:
                session.add(row)
                session.commit()
            except SQLAlchemyError:
                session.rollback()
                raise
            return _to_record(row)

    def all(self) -> list[ScrapeRecord]:
        statement = select(ScrapeRecordRow).order_by(ScrapeRecordRow.id)
        with self._lock, self._session_factory() as session:
            return [_to_record(row) for row in session.scalars(statement)]

    def dispose(self) -> None:
        self._engine.dispose()


def _to_record(row: ScrapeRecordRow) -> ScrapeRecord:
    return ScrapeRecord(
        id=row.id,
        url=row.url,
        domain=row.domain,
        price=row.price,
        success=bool(row.success),
        last_updated=int(row.last_updated),
    )
