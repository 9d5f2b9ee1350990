from snipertrack.domain.enums import SwapDirection


class TestEnumsAreStringMixin:
    """Enums use (str, Enum) so they serialize to strings in JSON and DB."""

    def test_swap_direction_is_str(self):
        assert isinstance(SwapDirection.BUY, str)
        assert SwapDirection.BUY == "BUY"
        assert SwapDirection.SELL == "SELL"

    def test_swap_direction_from_value(self):
        assert SwapDirection("SELL") is SwapDirection.SELL
