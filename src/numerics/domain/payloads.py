"""
Payloads — JSON wire-модели Rational и Complex

Immutable Pydantic модели для сериализации числовых значений в JSON.
Соответствуют схемам rational.json и complex.json.

Модели хранят только "сырые" компоненты; каноническую форму
обеспечивает конструктор соответствующего типа при from_json.
"""

from pydantic import BaseModel, Field, field_validator

from src.numerics.math.checked_integers import MAX_INT
from src.numerics.math.numerical_safeguards import is_valid_float


# =============================================================================
# RATIONAL
# =============================================================================


class RationalPayload(BaseModel):
    """
    Wire-представление Rational: {"num": int, "den": int}.
    """

    num: int = Field(..., ge=-MAX_INT, le=MAX_INT, strict=True, description="Числитель (знак дроби)")
    den: int = Field(..., ge=1, le=MAX_INT, strict=True, description="Знаменатель (> 0)")

    model_config = {"frozen": True, "extra": "forbid"}


# =============================================================================
# COMPLEX
# =============================================================================


class ComplexPayload(BaseModel):
    """
    Wire-представление Complex: {"real": float, "imaginary": float}.
    """

    real: float = Field(..., description="Вещественная часть")
    imaginary: float = Field(..., description="Мнимая часть")

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("real", "imaginary")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        """JSON не представляет NaN/Inf, поэтому компоненты обязаны быть конечными"""
        if not is_valid_float(v):
            raise ValueError(f"component must be finite, got {v}")
        return v
