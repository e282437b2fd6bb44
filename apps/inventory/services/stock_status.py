from typing import Optional

from ..models import StockStatus


def derive_stock_status(quantity: int, reorder_level: Optional[int] = None) -> str:
    """
    Stock status of an item holding ``quantity`` order units.

        quantity == 0                   OUT_OF_STOCK
        quantity <= reorder_level       LOW_IN_STOCK
        otherwise                       IN_STOCK

    Without a reorder level an item is never low in stock.
    """
    if quantity == 0:
        return StockStatus.OUT_OF_STOCK
    if reorder_level is not None and quantity <= reorder_level:
        return StockStatus.LOW_IN_STOCK
    return StockStatus.IN_STOCK
