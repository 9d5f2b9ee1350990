from snipertrack.db.models.swap import SwapRecord
from snipertrack.db.models.token import Token

__all__ = [
    "SwapRecord",
    "Token",
]
