"""
Domain models and value objects.

Contains the wire/storage record of the fixed-point decimal type.
"""

from src.core.domain.decimal_record import DecimalRecord

__all__ = [
    "DecimalRecord",
]
