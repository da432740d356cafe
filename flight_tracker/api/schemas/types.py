"""
Shared field types for API schemas.
"""

from decimal import Decimal
from typing import Annotated, Optional

from pydantic import PlainSerializer

# Decimal in Python, JSON number on the wire.
Price = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

OptionalPrice = Annotated[
    Optional[Decimal],
    PlainSerializer(
        lambda v: float(v) if v is not None else None,
        return_type=Optional[float],
        when_used="json",
    ),
]
