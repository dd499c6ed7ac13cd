"""
Contract Validation Module

Модуль для валидации JSON контрактов (wire-формат ScaledDecimal).
"""

from .validators import (
    ContractValidator,
    SchemaLoader,
    ScaledDecimalValidator,
    validate_scaled_decimal,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ScaledDecimalValidator",
    # Functions
    "validate_scaled_decimal",
]
