"""
Decimal Grammar — Текстовый формат десятичных чисел

Две грамматики, обе требуют совпадения всей строки:
- STRICT: знак? цифры+ ( "." цифры+ )?
- LAX:    знак? цифры* ( "." цифры* )?

Lax-грамматика предназначена для пользовательского ввода: пустая строка,
одиночный знак, "." и "-." разбираются как ноль.

Научная нотация, разделители разрядов и локализованные форматы
не поддерживаются.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Всё, что принимает STRICT, принимает и LAX (с тем же значением, scale >= strict)
2. Ведущие нули целой части и хвостовые нули дробной части отбрасываются
3. Несоответствие грамматике — DecimalGrammarError, слишком много цифр — SafeIntegerOverflow
"""

import re
from typing import Final, NamedTuple, Pattern

from src.core.math.safe_integer import MAX_SAFE_DIGITS, SafeIntegerOverflow, shift_left_clamped

# =============================================================================
# ГРАММАТИКИ
# =============================================================================

# [0-9] вместо \d: \d в Python совпадает и с не-ASCII цифрами
STRICT_DECIMAL_PATTERN: Final[Pattern[str]] = re.compile(
    r"(?P<sign>[-+]?)(?P<major>[0-9]+)(?:\.(?P<minor>[0-9]+))?"
)

LAX_DECIMAL_PATTERN: Final[Pattern[str]] = re.compile(
    r"(?P<sign>[-+]?)(?P<major>[0-9]*)(?:\.(?P<minor>[0-9]*))?"
)


class DecimalGrammarError(ValueError):
    """Строка не соответствует грамматике."""

    pass


class ParsedDecimal(NamedTuple):
    """Результат разбора: magnitude и scale (ещё не провалидированные)."""

    magnitude: int
    scale: int


# =============================================================================
# TRIM HELPERS
# =============================================================================


def trim_start(text: str, char: str) -> str:
    """
    Удаление ведущих вхождений символа.

    Examples:
        >>> trim_start("00123", "0")
        '123'
        >>> trim_start("0", "0")
        ''
    """
    return text.lstrip(char)


def trim_end(text: str, char: str) -> str:
    """
    Удаление хвостовых вхождений символа.

    Examples:
        >>> trim_end("12300", "0")
        '123'
    """
    return text.rstrip(char)


# =============================================================================
# РАЗБОР
# =============================================================================


def _digits_to_int(digits: str) -> int:
    # Ведущие нули дробной части ("0.0001") не значащие и в длину не входят.
    # Больше MAX_SAFE_DIGITS + 1 значащих цифр заведомо не влезет в безопасный диапазон;
    # отсекаем до int(), который ограничен sys.int_info.str_digits_check_threshold.
    significant = digits.lstrip("0")
    if len(significant) > MAX_SAFE_DIGITS + 1:
        raise SafeIntegerOverflow(f"too many significant digits: {len(significant)}")
    return int(significant or "0")


def _match(pattern: Pattern[str], text: object) -> "re.Match[str]":
    if not isinstance(text, str):
        raise DecimalGrammarError(f"expected a decimal string, got {type(text).__name__}")
    match = pattern.fullmatch(text)
    if match is None:
        raise DecimalGrammarError(f"invalid decimal string: {text!r}")
    return match


def _assemble(sign: str, major_str: str, minor_str: str, scale: int) -> ParsedDecimal:
    major = _digits_to_int(major_str)
    minor = _digits_to_int(minor_str)
    # При scale > SHIFT_CLAMP ненулевой major даёт небезопасный magnitude,
    # его отклоняет конструктор ScaledDecimal
    magnitude = shift_left_clamped(major, scale) + minor
    return ParsedDecimal(-magnitude if sign == "-" else magnitude, scale)


def parse_strict(text: str) -> ParsedDecimal:
    """
    Разбор строки по строгой грамматике.

    scale равен длине дробной части после удаления хвостовых нулей,
    а если дробная часть нулевая — 0. Поэтому "0.10" даёт (1, 1), "1.0" даёт (1, 0).

    Args:
        text: Десятичная строка

    Returns:
        ParsedDecimal(magnitude, scale)

    Raises:
        DecimalGrammarError: Если строка не соответствует STRICT_DECIMAL_PATTERN
        SafeIntegerOverflow: Если в группе цифр больше MAX_SAFE_DIGITS + 1 значащих цифр

    Examples:
        >>> parse_strict("-0.1234")
        ParsedDecimal(magnitude=-1234, scale=4)
        >>> parse_strict("0.10")
        ParsedDecimal(magnitude=1, scale=1)
    """
    match = _match(STRICT_DECIMAL_PATTERN, text)
    major_str = trim_start(match.group("major"), "0") or "0"
    minor_str = trim_end(match.group("minor") or "", "0") or "0"
    scale = 0 if minor_str == "0" else len(minor_str)
    return _assemble(match.group("sign"), major_str, minor_str, scale)


def parse_lax(text: str) -> ParsedDecimal:
    """
    Разбор строки по нестрогой грамматике (пользовательский ввод).

    Отсутствующие группы цифр считаются нулём. Если дробная группа
    присутствует и непуста, scale равен длине её значащей части (минимум 1,
    даже для "1.0" и "1.000"); если группы нет или она пуста ("1", "1.") — 0.

    Raises:
        DecimalGrammarError: Если строка не соответствует LAX_DECIMAL_PATTERN
            (например "..", "1.2.3", "abc")

    Examples:
        >>> parse_lax("")
        ParsedDecimal(magnitude=0, scale=0)
        >>> parse_lax("-.01")
        ParsedDecimal(magnitude=-1, scale=2)
        >>> parse_lax("1.0")
        ParsedDecimal(magnitude=10, scale=1)
    """
    match = _match(LAX_DECIMAL_PATTERN, text)
    minor_group = match.group("minor") or ""
    major_str = trim_start(match.group("major"), "0") or "0"
    minor_str = trim_end(minor_group, "0") or "0"
    scale = len(minor_str) if minor_group else 0
    return _assemble(match.group("sign"), major_str, minor_str, scale)
