import pytest
from apps.inventory.models import StockStatus
from apps.inventory.services import derive_stock_status


class TestDeriveStockStatus:
    """Tests for derive_stock_status()"""

    @pytest.mark.parametrize('quantity, reorder_level, expected', [
        (0, None, StockStatus.OUT_OF_STOCK),
        (0, 5, StockStatus.OUT_OF_STOCK),
        (0, 0, StockStatus.OUT_OF_STOCK),
        (3, 5, StockStatus.LOW_IN_STOCK),
        (5, 5, StockStatus.LOW_IN_STOCK),
        (6, 5, StockStatus.IN_STOCK),
        (1, 0, StockStatus.IN_STOCK),
        (1, None, StockStatus.IN_STOCK),
        (1000, None, StockStatus.IN_STOCK),
    ])
    def test_status_table(self, quantity, reorder_level, expected):
        assert derive_stock_status(quantity, reorder_level) == expected

    def test_reorder_level_is_optional(self):
        assert derive_stock_status(2) == StockStatus.IN_STOCK
