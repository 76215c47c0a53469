from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import BigInteger
from sqlalchemy.types import TypeDecorator

CENT = Decimal("0.01")
MAX_AMOUNT = Decimal(10) ** 13


class Cents(TypeDecorator):
    """``Decimal`` money stored as an integer count of minor units (cents).

    SQL arithmetic and comparisons on these columns stay exact on every
    backend, SQLite included.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> Optional[int]:
        if value is None:
            return None
        return int(Decimal(value).scaleb(2).to_integral_value())

    def process_result_value(self, value: Any, dialect: Any) -> Optional[Decimal]:
        if value is None:
            return None
        return Decimal(int(value)).scaleb(-2)
