"""
Core math modules

Точная десятичная арифметика с фиксированной точкой поверх безопасных целых.
"""

# Safe Integer primitives
from src.core.math.safe_integer import (
    MAX_SAFE_DIGITS,
    MAX_SAFE_INTEGER,
    MIN_SAFE_INTEGER,
    SafeIntegerOverflow,
    is_safe_integer,
)

# Decimal Grammar
from src.core.math.decimal_grammar import (
    LAX_DECIMAL_PATTERN,
    STRICT_DECIMAL_PATTERN,
    DecimalGrammarError,
    ParsedDecimal,
    parse_lax,
    parse_strict,
    trim_end,
    trim_start,
)

# ScaledDecimal
from src.core.math.scaled_decimal import (
    MAX_RENDER_SCALE,
    DecimalOverflowError,
    DecimalParseError,
    DivisionNotImplementedError,
    InvalidScaleError,
    InvalidValueError,
    Ordering,
    ScaleDirectionError,
    ScaledDecimal,
    ScaledDecimalError,
)

__all__ = [
    # Safe Integer — Constants
    "MAX_SAFE_DIGITS",
    "MAX_SAFE_INTEGER",
    "MIN_SAFE_INTEGER",
    # Safe Integer — Exceptions
    "SafeIntegerOverflow",
    # Safe Integer — Functions
    "is_safe_integer",
    # Decimal Grammar — Patterns
    "LAX_DECIMAL_PATTERN",
    "STRICT_DECIMAL_PATTERN",
    # Decimal Grammar — Types
    "DecimalGrammarError",
    "ParsedDecimal",
    # Decimal Grammar — Functions
    "parse_lax",
    "parse_strict",
    "trim_end",
    "trim_start",
    # ScaledDecimal — Exceptions
    "ScaledDecimalError",
    "InvalidValueError",
    "InvalidScaleError",
    "DecimalParseError",
    "ScaleDirectionError",
    "DecimalOverflowError",
    "DivisionNotImplementedError",
    # ScaledDecimal — Constants
    "MAX_RENDER_SCALE",
    # ScaledDecimal — Types
    "Ordering",
    "ScaledDecimal",
]
