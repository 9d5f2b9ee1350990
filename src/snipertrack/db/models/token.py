from typing import Optional

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from snipertrack.db.session import Base, TimestampMixin, UUIDPrimaryKey


class Token(UUIDPrimaryKey, TimestampMixin, Base):
    """A launched token whose swaps are tracked."""

    __tablename__ = "tokens"

    symbol: Mapped[str] = mapped_column(String(50), unique=True)
    name: Mapped[str] = mapped_column(String(255), default="")
    block_number: Mapped[Optional[int]] = mapped_column(BigInteger, default=None)  # token creation block
    genesis_block: Mapped[Optional[int]] = mapped_column(BigInteger, default=None)  # first tradable block

    @property
    def launch_block(self) -> int:
        """Reference block for early-entry checks: genesis block, else creation block."""
        if self.genesis_block is not None:
            return self.genesis_block
        return self.block_number or 0
