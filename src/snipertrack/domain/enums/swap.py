from enum import Enum


class SwapDirection(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
