from snipertrack.domain.enums.swap import SwapDirection

__all__ = [
    "SwapDirection",
]
