import uuid
from typing import Optional

import sqlalchemy as sa
from sqlalchemy import BigInteger, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from snipertrack.db.session import Base, TimestampMixin


class SwapRecord(TimestampMixin, Base):
    """Raw swap document for one token. BigInt PK for high-volume append-only data.

    ``data`` holds the original JSON document, including the per-token
    ``{SYMBOL}_OUT_BeforeTax``-style amount fields.
    """

    __tablename__ = "swaps"
    __table_args__ = (
        UniqueConstraint("token_id", "tx_hash", name="uq_token_tx_hash"),
        Index("ix_token_block_number", "token_id", "block_number"),
    )

    id: Mapped[int] = mapped_column(BigInteger().with_variant(sa.Integer, "sqlite"), primary_key=True, autoincrement=True)
    token_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("tokens.id"))
    tx_hash: Mapped[str] = mapped_column(String(100), index=True)
    block_number: Mapped[Optional[int]] = mapped_column(BigInteger, default=None)
    timestamp: Mapped[Optional[int]] = mapped_column(BigInteger, default=None)
    swap_type: Mapped[Optional[str]] = mapped_column(String(10), default=None)
    maker: Mapped[Optional[str]] = mapped_column(String(100), default=None)
    data: Mapped[str] = mapped_column(Text)
