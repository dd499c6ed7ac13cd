"""
DecimalRecord — Wire/storage представление ScaledDecimal

Immutable Pydantic модель записи {magnitude, scale}.
Соответствует схеме contracts/schema/scaled_decimal.json.

Поля строго целые: "12", 12.0 и true отклоняются, чтобы запись
восстанавливала ScaledDecimal без неявных преобразований.
"""

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from src.core.math.safe_integer import MAX_SAFE_INTEGER, MIN_SAFE_INTEGER

if TYPE_CHECKING:
    from src.core.math.scaled_decimal import ScaledDecimal


# =============================================================================
# DECIMAL RECORD MODEL
# =============================================================================


class DecimalRecord(BaseModel):
    """
    Запись ScaledDecimal для JSON/хранилища.

    Immutable модель (frozen=True). Лишние поля запрещены.
    """

    magnitude: int = Field(
        ...,
        ge=MIN_SAFE_INTEGER,
        le=MAX_SAFE_INTEGER,
        description="Целый числитель (безопасное целое)",
    )
    scale: int = Field(
        ...,
        ge=0,
        le=MAX_SAFE_INTEGER,
        description="Число дробных разрядов",
    )

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    @classmethod
    def from_decimal(cls, value: "ScaledDecimal") -> "DecimalRecord":
        return cls(magnitude=value.magnitude, scale=value.scale)

    def to_decimal(self) -> "ScaledDecimal":
        """Восстановление ScaledDecimal (новый изменяемый экземпляр)."""
        from src.core.math.scaled_decimal import ScaledDecimal

        return ScaledDecimal.deserialize(self.model_dump())
