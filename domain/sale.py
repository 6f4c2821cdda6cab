"""
Domain: Sale events.

A sale event describes one point-of-sale transaction for a product line.
Each variant knows how to project itself into:
- a ledger row (ordered list of cell values), and
- a notification text (fixed template, labels reproduced verbatim).

Rules enforced here:
- `item` must be non-empty before the event is dispatched anywhere.
- `timestamp` is always populated before dispatch (defaulted to UTC now).
- No other field is validated or normalized; price and payment type are
  free-form strings passed through verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import ClassVar, List, Optional

from .time import utc_now_timestamp


class ValidationError(ValueError):
    """Raised when a sale event is missing a required field."""
    pass


class ProductLine(str, Enum):
    TOY = "toy"
    JEWELRY = "jewelry"


class SaleEvent:
    """
    Base for sale event variants.

    Subclasses are frozen dataclasses declaring `timestamp` and `item` plus
    their own fields, and implement the two projections.
    """

    __slots__ = ()

    product_line: ClassVar[ProductLine]

    def validate(self) -> None:
        if not self.item:
            raise ValidationError("Missing required field: item")

    def with_default_timestamp(self, now: Optional[datetime] = None) -> "SaleEvent":
        """Return this event, or a copy stamped with the current UTC time if it has none."""

        if self.timestamp:
            return self
        return replace(self, timestamp=utc_now_timestamp(now))

    def to_row(self) -> List[str]:
        raise NotImplementedError

    def to_message(self) -> str:
        raise NotImplementedError

    def describe(self) -> str:
        return self.item


@dataclass(frozen=True, slots=True)
class ToySale(SaleEvent):
    """
    Sale of a 3D-printed figurine.

    Ledger columns: Время продажи | Фигурка | Пластик | Цена | Тип оплаты
    """

    product_line: ClassVar[ProductLine] = ProductLine.TOY

    timestamp: str
    item: str
    material: str = ""
    price: str = ""
    payment_type: str = ""

    def to_row(self) -> List[str]:
        return [self.timestamp, self.item, self.material, self.price, self.payment_type]

    def to_message(self) -> str:
        return (
            f"Фигурка: {self.item}\n"
            f"Пластик: {self.material}\n"
            f"Продано за: {self.price}\n"
            f"Тип оплаты: {self.payment_type}"
        )

    def describe(self) -> str:
        return f"{self.item} - {self.material}"


@dataclass(frozen=True, slots=True)
class JewelrySale(SaleEvent):
    """
    Sale of a jewelry product.

    Ledger columns: Время продажи | Товар | Цена | Тип оплаты
    """

    product_line: ClassVar[ProductLine] = ProductLine.JEWELRY

    timestamp: str
    item: str
    price: str = ""
    payment_type: str = ""

    def to_row(self) -> List[str]:
        return [self.timestamp, self.item, self.price, self.payment_type]

    def to_message(self) -> str:
        return (
            f"Товар: {self.item}\n"
            f"Продано за: {self.price}\n"
            f"Тип оплаты: {self.payment_type}"
        )


__all__ = [
    "JewelrySale",
    "ProductLine",
    "SaleEvent",
    "ToySale",
    "ValidationError",
]
