"""
db/models/scrape_record.py

One row per price scrape attempt. Rows are append-only.
"""

from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class ScrapeRecordRow(Base):
    __tablename__ = "scraped_data"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    domain: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        comment="Decimal text, or '0' when no price was found",
    )
    success: Mapped[bool] = mapped_column(Boolean, nullable=False)
    last_updated: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        comment="Milliseconds since epoch",
    )

    __table_args__ = (
        Index("ix_scraped_data_url", "url"),
    )

    def __repr__(self) -> str:
        return (
            f"<ScrapeRecordRow id={self.id} url={self.url!r} "
            f"price={self.price!r} success={self.success}>"
        )
