"""
ScaledDecimal — Десятичное число с фиксированной точкой

Точное представление десятичных величин (деньги, цены, количества) без
ошибок двоичного float: целый magnitude и неотрицательный scale,
значение = magnitude / 10^scale.

Модуль обеспечивает:
- Валидированное создание и (де)сериализацию в запись {magnitude, scale}
- Разбор строк по строгой и нестрогой грамматике (decimal_grammar)
- Нормализацию scale, сравнение и арифметику с детекцией переполнения
- Рендеринг в строку и приближённый float

ВАЖНО: тип изменяемый. Методы add/subtract/multiply/increase_scale/
transform_scale/trim_scale/normalize_to меняют экземпляр на месте.
Статические equal/compare/less_than/... и методы-запросы экземпляр
не меняют никогда. Для чистых вычислений используйте clone().

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. magnitude и scale всегда безопасные целые, scale >= 0
2. (120, 2) и (12, 1) — разные состояния, но equal() считает их равными
3. Неудачная операция оставляет экземпляр без изменений
4. Потеря точности возможна только в transform_scale, и она возвращает
   отброшенный остаток вызывающему
5. Деление не реализовано: политика округления не определена
"""

import logging
from enum import IntEnum
from typing import Any, Callable, Final, Mapping, Tuple

from src.core.math.decimal_grammar import (
    DecimalGrammarError,
    ParsedDecimal,
    parse_lax,
    parse_strict,
)
from src.core.math.safe_integer import (
    SafeIntegerOverflow,
    count_trailing_zeros,
    ensure_safe,
    is_safe_integer,
    pow10,
    shift_left,
    shift_left_clamped,
    truncated_remainder,
)

logger = logging.getLogger(__name__)

# Начиная с этого scale, to_lossy_number() гарантированно даёт 0.0
# (|magnitude| < 10^16, а наименьший субнормальный double ~ 4.9e-324)
LOSSY_SCALE_LIMIT: Final[int] = 400

# Наибольший scale, при котором to_string() рендерит дробную часть:
# строка дробной части имеет длину scale
MAX_RENDER_SCALE: Final[int] = 4096


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ScaledDecimalError(Exception):
    """Базовое исключение ScaledDecimal."""

    pass


class InvalidValueError(ScaledDecimalError, ValueError):
    """magnitude не является безопасным целым."""

    pass


class InvalidScaleError(ScaledDecimalError, ValueError):
    """scale не является безопасным целым или отрицателен."""

    pass


class DecimalParseError(ScaledDecimalError, ValueError):
    """Строка не соответствует активной грамматике."""

    pass


class ScaleDirectionError(ScaledDecimalError, ValueError):
    """Запрошено сужение scale там, где допустимо только расширение."""

    pass


class DecimalOverflowError(ScaledDecimalError, OverflowError):
    """Результат арифметики или сдвига scale вне безопасного диапазона."""

    pass


class DivisionNotImplementedError(ScaledDecimalError, NotImplementedError):
    """Деление требует политики округления, которая не определена."""

    pass


class Ordering(IntEnum):
    """Результат compare()."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


# =============================================================================
# SCALED DECIMAL
# =============================================================================


class ScaledDecimal:
    """
    Десятичное число с фиксированной точкой: magnitude / 10^scale.

    Examples:
        >>> x = ScaledDecimal.parse("1.74291456")
        >>> x.add(ScaledDecimal.parse("-0.53168294")).trim_scale()
        ScaledDecimal(magnitude=121123162, scale=8)
        >>> str(x)
        '1.21123162'
    """

    __slots__ = ("_value", "_scale")

    # Мутабельный тип: хэш запрещён
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, magnitude: int, scale: int = 0):
        """
        Валидированное создание.

        Args:
            magnitude: Целый числитель (безопасное целое)
            scale: Число дробных разрядов (безопасное целое >= 0)

        Raises:
            InvalidValueError: Если magnitude не безопасное целое
            InvalidScaleError: Если scale не безопасное целое или отрицателен
        """
        if not is_safe_integer(magnitude):
            raise InvalidValueError(f"unsafe integer value: {magnitude!r}")
        if not is_safe_integer(scale):
            raise InvalidScaleError(f"unsafe integer scale: {scale!r}")
        if scale < 0:
            raise InvalidScaleError(f"scale must be non-negative, got {scale}")
        self._value = magnitude
        self._scale = scale

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def deserialize(cls, record: Mapping[str, Any]) -> "ScaledDecimal":
        """
        Создание из записи {"magnitude": int, "scale": int}.

        Та же валидация, что и в конструкторе. Отсутствующее поле
        считается невалидным значением соответствующего типа.
        """
        return cls(record.get("magnitude"), record.get("scale"))  # type: ignore[arg-type]

    @classmethod
    def parse(cls, text: str) -> "ScaledDecimal":
        """
        Разбор по строгой грамматике: "-12.5", "+0.001", "100".

        Raises:
            DecimalParseError: Строка не соответствует грамматике
            InvalidValueError: Значение вне безопасного диапазона
        """
        return cls._from_parsed(parse_strict, text)

    @classmethod
    def parse_lax(cls, text: str) -> "ScaledDecimal":
        """
        Разбор по нестрогой грамматике (для пользовательского ввода):
        "", "-", ".", "1.", ".5" допустимы.
        """
        return cls._from_parsed(parse_lax, text)

    @classmethod
    def _from_parsed(
        cls, parser: Callable[[str], ParsedDecimal], text: str
    ) -> "ScaledDecimal":
        try:
            parsed = parser(text)
        except DecimalGrammarError as e:
            raise DecimalParseError(str(e)) from e
        except SafeIntegerOverflow as e:
            raise InvalidValueError(f"unsafe integer value in {text!r}: {e}") from e
        return cls(parsed.magnitude, parsed.scale)

    @classmethod
    def from_json(cls, text: str) -> "ScaledDecimal":
        """Создание из JSON-текста записи (через DecimalRecord)."""
        from src.core.domain.decimal_record import DecimalRecord

        return DecimalRecord.model_validate_json(text).to_decimal()

    def clone(self) -> "ScaledDecimal":
        return ScaledDecimal(self._value, self._scale)

    # -------------------------------------------------------------------------
    # Свойства
    # -------------------------------------------------------------------------

    @property
    def value(self) -> int:
        return self._value

    @property
    def magnitude(self) -> int:
        return self._value

    @property
    def scale(self) -> int:
        return self._scale

    # -------------------------------------------------------------------------
    # Нормализация (read-only)
    # -------------------------------------------------------------------------

    def relative_value(self, target_scale: int) -> int:
        """
        magnitude, выраженный в target_scale (только расширение).

        Raises:
            ScaleDirectionError: Если target_scale < scale
            DecimalOverflowError: Если результат не безопасное целое
        """
        if target_scale < self._scale:
            raise ScaleDirectionError(
                f"target scale {target_scale} must be >= current scale {self._scale}"
            )
        try:
            return shift_left(self._value, target_scale - self._scale)
        except SafeIntegerOverflow as e:
            raise DecimalOverflowError(str(e)) from e

    def get_relative_value(self, other: "ScaledDecimal") -> int:
        """magnitude, выраженный в scale другого экземпляра."""
        return self.relative_value(other._scale)

    @staticmethod
    def normalized_values(
        a: "ScaledDecimal", b: "ScaledDecimal"
    ) -> Tuple[Tuple[int, int], int]:
        """
        Пара magnitude, приведённых к max(a.scale, b.scale), и этот scale.

        Сдвиг ограничен SHIFT_CLAMP разрядами, поэтому значения могут выходить
        за безопасный диапазон (но порядок и переполнение суммы сохраняются).
        Вызывающий обязан проверить результат арифметики.

        Returns:
            ((lhs, rhs), scale)
        """
        if a._scale < b._scale:
            lhs = shift_left_clamped(a._value, b._scale - a._scale)
            return (lhs, b._value), b._scale
        rhs = shift_left_clamped(b._value, a._scale - b._scale)
        return (a._value, rhs), a._scale

    @staticmethod
    def maximum_scale(
        first: "ScaledDecimal", *rest: "ScaledDecimal"
    ) -> Tuple[int, "ScaledDecimal"]:
        """
        Индекс и экземпляр с наибольшим scale (при равенстве — первый).
        """
        max_index, max_item = 0, first
        for index, item in enumerate(rest, start=1):
            if item._scale > max_item._scale:
                max_index, max_item = index, item
        return max_index, max_item

    @classmethod
    def normalize(cls, *values: "ScaledDecimal") -> Tuple["ScaledDecimal", ...]:
        """
        Приведение всех значений к наибольшему scale.

        Экземпляр с наибольшим scale возвращается как есть, остальные —
        расширенными копиями. Аргументы не изменяются.

        Raises:
            DecimalOverflowError: Если расширение какого-либо значения переполняет
        """
        if not values:
            return ()
        max_index, max_item = cls.maximum_scale(*values)
        return tuple(
            item if index == max_index else item.clone().normalize_to(max_item)
            for index, item in enumerate(values)
        )

    # -------------------------------------------------------------------------
    # Сравнение (static, read-only)
    # -------------------------------------------------------------------------

    @staticmethod
    def equal(a: "ScaledDecimal", b: "ScaledDecimal") -> bool:
        """Равенство значений независимо от представления."""
        (lhs, rhs), _ = ScaledDecimal.normalized_values(a, b)
        return lhs == rhs

    @staticmethod
    def compare(a: "ScaledDecimal", b: "ScaledDecimal") -> Ordering:
        (lhs, rhs), _ = ScaledDecimal.normalized_values(a, b)
        if lhs < rhs:
            return Ordering.LESS
        if lhs == rhs:
            return Ordering.EQUAL
        return Ordering.GREATER

    @staticmethod
    def less_than(a: "ScaledDecimal", b: "ScaledDecimal") -> bool:
        return ScaledDecimal.compare(a, b) is Ordering.LESS

    @staticmethod
    def less_than_or_equal(a: "ScaledDecimal", b: "ScaledDecimal") -> bool:
        return ScaledDecimal.compare(a, b) is not Ordering.GREATER

    @staticmethod
    def greater_than(a: "ScaledDecimal", b: "ScaledDecimal") -> bool:
        return ScaledDecimal.compare(a, b) is Ordering.GREATER

    @staticmethod
    def greater_than_or_equal(a: "ScaledDecimal", b: "ScaledDecimal") -> bool:
        return ScaledDecimal.compare(a, b) is not Ordering.LESS

    # -------------------------------------------------------------------------
    # Запросы
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self._value == 0

    def is_positive(self) -> bool:
        return self._value > 0

    def is_negative(self) -> bool:
        return self._value < 0

    def has_sub_units(self) -> bool:
        """True если есть ненулевая дробная часть."""
        return truncated_remainder(self._value, self._scale) != 0

    def to_units(self) -> Tuple[int, int]:
        """
        Целая часть (со знаком, усечённая к нулю) и модуль дробной части.

        Examples:
            >>> ScaledDecimal.parse("-123.456").to_units()
            (-123, 456)
        """
        minor = truncated_remainder(self._value, self._scale)
        # При scale > SHIFT_CLAMP minor == magnitude, и major обязан быть 0
        major = 0 if minor == self._value else (self._value - minor) // pow10(self._scale)
        return major, abs(minor)

    # -------------------------------------------------------------------------
    # Изменение scale (in-place)
    # -------------------------------------------------------------------------

    def normalize_to(self, other: "ScaledDecimal") -> "ScaledDecimal":
        """Расширение до scale другого экземпляра; сужения не бывает."""
        if self._scale < other._scale:
            self.transform_scale(other._scale)
        return self

    def increase_scale(self, increment: int) -> "ScaledDecimal":
        """
        magnitude *= 10^increment, scale += increment.

        Raises:
            InvalidScaleError: Если increment отрицательный или новый scale небезопасен
            DecimalOverflowError: Если новый magnitude вне безопасного диапазона
        """
        if not is_safe_integer(increment) or increment < 0:
            raise InvalidScaleError(
                f"scale increment must be a non-negative safe integer, got {increment!r}"
            )
        new_scale = self._scale + increment
        if not is_safe_integer(new_scale):
            raise InvalidScaleError(f"unsafe integer scale: {new_scale}")
        try:
            new_value = shift_left(self._value, increment)
        except SafeIntegerOverflow as e:
            raise DecimalOverflowError(f"scale increase overflow: {e}") from e
        self._value = new_value
        self._scale = new_scale
        return self

    def transform_scale(self, new_scale: int) -> int:
        """
        Перевод в new_scale: расширение или усечение.

        При расширении делегирует increase_scale и возвращает 0. При сужении
        отбрасывает младшие цифры (усечение к нулю, не округление) и
        возвращает отброшенный остаток со знаком magnitude.

        Returns:
            Отброшенный остаток в единицах старого scale

        Examples:
            >>> x = ScaledDecimal.parse("123.456")
            >>> x.transform_scale(1)
            56
            >>> x
            ScaledDecimal(magnitude=1234, scale=1)
        """
        if not is_safe_integer(new_scale) or new_scale < 0:
            raise InvalidScaleError(
                f"scale must be a non-negative safe integer, got {new_scale!r}"
            )
        if new_scale > self._scale:
            self.increase_scale(new_scale - self._scale)
            return 0

        places = self._scale - new_scale
        truncated = truncated_remainder(self._value, places)
        if truncated == self._value:
            new_value = 0
        else:
            new_value = (self._value - truncated) // pow10(places)

        if truncated != 0:
            logger.debug(
                "transform_scale discarded %d at scale %d (%d -> scale %d)",
                truncated,
                self._scale,
                self._value,
                new_scale,
            )
        self._value = new_value
        self._scale = new_scale
        return truncated

    def trim_scale(self) -> "ScaledDecimal":
        """
        Удаление хвостовых нулей: минимальный scale для того же значения.

        (123000, 3) -> (123, 0); (123450, 3) -> (12345, 2); (0, 5) -> (0, 0).
        """
        zeros = count_trailing_zeros(self._value, self._scale)
        if zeros:
            self._value = self._value // pow10(zeros) if self._value else 0
            self._scale -= zeros
        return self

    # -------------------------------------------------------------------------
    # Арифметика (in-place)
    # -------------------------------------------------------------------------

    def _commit_sum(
        self, other: "ScaledDecimal", negate: bool, operation: str
    ) -> "ScaledDecimal":
        (lhs, rhs), scale = ScaledDecimal.normalized_values(self, other)
        try:
            value = ensure_safe(lhs - rhs if negate else lhs + rhs, operation)
        except SafeIntegerOverflow as e:
            raise DecimalOverflowError(str(e)) from e
        self._value = value
        self._scale = scale
        return self

    def add(self, other: "ScaledDecimal") -> "ScaledDecimal":
        """
        self += other (на месте).

        Raises:
            DecimalOverflowError: Если сумма вне безопасного диапазона
                (экземпляр при этом не меняется)
        """
        return self._commit_sum(other, negate=False, operation="addition")

    def subtract(self, other: "ScaledDecimal") -> "ScaledDecimal":
        """self -= other (на месте)."""
        return self._commit_sum(other, negate=True, operation="subtraction")

    def multiply(self, other: "ScaledDecimal") -> "ScaledDecimal":
        """
        self *= other (на месте): magnitude = произведение, scale = сумма scale.

        Raises:
            DecimalOverflowError: Если произведение вне безопасного диапазона
            InvalidScaleError: Если сумма scale небезопасна
        """
        scale = self._scale + other._scale
        if not is_safe_integer(scale):
            raise InvalidScaleError(f"unsafe integer scale: {scale}")
        try:
            value = ensure_safe(self._value * other._value, "multiplication")
        except SafeIntegerOverflow as e:
            raise DecimalOverflowError(str(e)) from e
        self._value = value
        self._scale = scale
        return self

    def quotient(self, other: "ScaledDecimal") -> "ScaledDecimal":
        raise DivisionNotImplementedError("quotient requires a rounding policy")

    def remainder(self, other: "ScaledDecimal") -> "ScaledDecimal":
        raise DivisionNotImplementedError("remainder requires a rounding policy")

    @staticmethod
    def divide(a: "ScaledDecimal", b: "ScaledDecimal") -> Tuple[int, int]:
        raise DivisionNotImplementedError("divide requires a rounding policy")

    # -------------------------------------------------------------------------
    # Рендеринг и сериализация
    # -------------------------------------------------------------------------

    def to_string(self) -> str:
        """
        Десятичная строка: "123", "-0.001", "10.5".

        Дробная часть дополняется нулями слева до scale цифр.

        Raises:
            InvalidScaleError: Если есть дробная часть и scale > MAX_RENDER_SCALE
                (сначала trim_scale() или transform_scale())
        """
        major, minor = self.to_units()
        if minor == 0:
            return str(major)
        if self._scale > MAX_RENDER_SCALE:
            raise InvalidScaleError(
                f"scale {self._scale} exceeds MAX_RENDER_SCALE {MAX_RENDER_SCALE} for rendering"
            )
        # -0 как int теряет знак
        zero_sign = "-" if major == 0 and self._value < 0 else ""
        return f"{zero_sign}{major}.{str(minor).zfill(self._scale)}"

    def to_lossy_number(self) -> float:
        """
        Приближённое float-значение. Точность НЕ гарантируется.
        """
        if self._scale >= LOSSY_SCALE_LIMIT:
            return -0.0 if self._value < 0 else 0.0
        return self._value / pow10(self._scale)

    def serialize(self) -> dict:
        """Запись {"magnitude": int, "scale": int}, обратная deserialize()."""
        return {"magnitude": self._value, "scale": self._scale}

    def to_json(self) -> str:
        """JSON-текст записи (через DecimalRecord)."""
        from src.core.domain.decimal_record import DecimalRecord

        return DecimalRecord.from_decimal(self).model_dump_json()

    # -------------------------------------------------------------------------
    # Python protocol
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"ScaledDecimal(magnitude={self._value}, scale={self._scale})"

    def __float__(self) -> float:
        return self.to_lossy_number()

    def __eq__(self, other: object) -> bool:
        # Сравнение представлений; равенство значений — ScaledDecimal.equal()
        if not isinstance(other, ScaledDecimal):
            return NotImplemented
        return self._value == other._value and self._scale == other._scale
