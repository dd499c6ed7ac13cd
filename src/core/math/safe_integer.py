"""
Safe Integer — Примитивы точной целочисленной арифметики

Модуль задаёт диапазон "безопасных" целых чисел и проверяемые операции над ними:
- Проверка принадлежности диапазону ±(2^53 - 1)
- Десятичный сдвиг (умножение на 10^k) с детекцией переполнения
- Остаток от деления на 10^k с сохранением знака делимого (усечение к нулю)

Диапазон совпадает с диапазоном целых, точно представимых в IEEE-754 double.
Это позволяет передавать magnitude/scale через JSON без потери точности
потребителям, которые хранят числа как double.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат любой checked-операции либо безопасное целое, либо SafeIntegerOverflow
2. Степени десяти никогда не вычисляются для показателя > MAX_SAFE_DIGITS + 1
3. bool и float не считаются целыми
"""

from typing import Final

# =============================================================================
# ДИАПАЗОН БЕЗОПАСНЫХ ЦЕЛЫХ
# =============================================================================

# Наибольшее целое, точно представимое в double
MAX_SAFE_INTEGER: Final[int] = 2**53 - 1

# Наименьшее целое, точно представимое в double
MIN_SAFE_INTEGER: Final[int] = -MAX_SAFE_INTEGER

# Количество десятичных цифр в MAX_SAFE_INTEGER (9007199254740991)
# Сдвиг ненулевого безопасного целого более чем на столько разрядов всегда переполняет
MAX_SAFE_DIGITS: Final[int] = len(str(MAX_SAFE_INTEGER))

# Показатель, до которого ограничивается сдвиг в операциях сравнения и сложения.
# 10^(MAX_SAFE_DIGITS + 1) больше любого безопасного целого, поэтому порядок и
# факт переполнения сохраняются при ограничении показателя этим значением.
SHIFT_CLAMP: Final[int] = MAX_SAFE_DIGITS + 1


# =============================================================================
# EXCEPTIONS
# =============================================================================


class SafeIntegerOverflow(OverflowError):
    """Результат операции вышел за пределы безопасного диапазона."""

    pass


# =============================================================================
# ПРОВЕРКИ
# =============================================================================


def is_safe_integer(value: object) -> bool:
    """
    Проверка, является ли значение безопасным целым.

    Args:
        value: Проверяемое значение (любой тип)

    Returns:
        True если value — int (не bool) в диапазоне [MIN_SAFE_INTEGER, MAX_SAFE_INTEGER]

    Examples:
        >>> is_safe_integer(42)
        True
        >>> is_safe_integer(2**53)
        False
        >>> is_safe_integer(1.0)
        False
        >>> is_safe_integer(True)
        False
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return MIN_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER


def ensure_safe(value: int, operation: str) -> int:
    """
    Возвращает value, если оно безопасное, иначе поднимает SafeIntegerOverflow.

    Args:
        value: Результат вычисления
        operation: Имя операции (для сообщения об ошибке)

    Raises:
        SafeIntegerOverflow: Если value вне безопасного диапазона
    """
    if not is_safe_integer(value):
        raise SafeIntegerOverflow(f"{operation} overflow: {value} is not a safe integer")
    return value


# =============================================================================
# СТЕПЕНИ ДЕСЯТИ И СДВИГИ
# =============================================================================


def pow10(exponent: int) -> int:
    """
    10 в степени exponent (точно, как int).

    Raises:
        ValueError: Если exponent отрицательный
    """
    if exponent < 0:
        raise ValueError(f"exponent must be non-negative, got {exponent}")
    return 10**exponent


def shift_left(magnitude: int, places: int) -> int:
    """
    Точный десятичный сдвиг: magnitude * 10^places с проверкой переполнения.

    Args:
        magnitude: Безопасное целое
        places: Количество разрядов (>= 0)

    Returns:
        magnitude * 10^places

    Raises:
        SafeIntegerOverflow: Если результат не безопасное целое

    Examples:
        >>> shift_left(123, 3)
        123000
        >>> shift_left(0, 10**9)
        0
    """
    if magnitude == 0:
        return 0
    if places > MAX_SAFE_DIGITS:
        raise SafeIntegerOverflow(
            f"decimal shift overflow: {magnitude} shifted by {places} places"
        )
    return ensure_safe(magnitude * pow10(places), "decimal shift")


def shift_left_clamped(magnitude: int, places: int) -> int:
    """
    Десятичный сдвиг без проверки переполнения, с ограничением показателя.

    Результат точен при places <= SHIFT_CLAMP. При большем places
    ненулевой magnitude сдвигается ровно на SHIFT_CLAMP разрядов: по модулю
    результат всё равно больше любого безопасного целого, так что сравнение
    с безопасным целым и проверка суммы на переполнение дают тот же ответ,
    что и точное значение.
    """
    if magnitude == 0:
        return 0
    return magnitude * pow10(min(places, SHIFT_CLAMP))


def truncated_remainder(magnitude: int, places: int) -> int:
    """
    Младшие places цифр magnitude со знаком делимого.

    Python `%` округляет частное вниз (floor), здесь же частное усекается
    к нулю, поэтому остаток имеет знак magnitude.

    Examples:
        >>> truncated_remainder(123456, 2)
        56
        >>> truncated_remainder(-123456, 2)
        -56
    """
    remainder = abs(magnitude) % pow10(min(places, SHIFT_CLAMP))
    return -remainder if magnitude < 0 else remainder


def count_trailing_zeros(magnitude: int, limit: int) -> int:
    """
    Количество нулевых младших цифр magnitude, но не более limit.

    Ноль считается состоящим из нулей целиком (возвращается limit).
    """
    if magnitude == 0:
        return limit
    count = 0
    while count < limit and truncated_remainder(magnitude, count + 1) == 0:
        count += 1
    return count

