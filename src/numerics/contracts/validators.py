"""
JSON Schema контракты сериализованной формы числовых типов.

Каждый контракт собирается один раз при импорте модуля: схема читается
из contracts/schema/, проходит meta-validation и компилируется в валидатор,
который затем переиспользуется в Rational.from_dict / Complex.from_dict.

Схемы:
- rational.json: {"num": int, "den": int > 0}, оба в 64-bit диапазоне
- complex.json: {"real": number, "imaginary": number}, оба конечные

Ключевое слово "finite" расширяет Draft 2020-12: JSON не кодирует NaN/Inf,
но dict, собранный в Python, может их содержать.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Final, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError, validators
from jsonschema.exceptions import best_match

from src.numerics.math.numerical_safeguards import is_valid_float

SCHEMA_DIR: Final[Path] = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADING
# =============================================================================


@lru_cache(maxsize=None)
def load_schema(schema_name: str) -> Dict[str, Any]:
    """
    Загрузка и meta-validation схемы (кэшируется по имени).

    Raises:
        FileNotFoundError: Если файл схемы не найден
        ValueError: Если файл не является валидной JSON Schema
    """
    schema_path = SCHEMA_DIR / f"{schema_name}.json"
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema not found: {schema_path}")

    with open(schema_path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    try:
        NumericValidator.check_schema(schema)
    except jsonschema.SchemaError as e:
        raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

    return schema


def _finite(validator, finite: bool, instance: Any, schema: Dict[str, Any]) -> Iterator[ValidationError]:
    if finite and isinstance(instance, float) and not is_valid_float(instance):
        yield ValidationError(f"{instance!r} is not a finite number")


NumericValidator = validators.extend(Draft202012Validator, {"finite": _finite})


# =============================================================================
# CONTRACTS
# =============================================================================


class NumericContract:
    """
    Контракт одной сериализованной формы: схема и скомпилированный валидатор.
    """

    def __init__(self, schema_name: str):
        self.name = schema_name
        self.schema = load_schema(schema_name)
        self._validator = NumericValidator(self.schema)

    def check(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Проверка данных; при нарушениях поднимает наиболее релевантную ошибку.

        Returns:
            Те же данные, если они соответствуют схеме

        Raises:
            ValidationError: best_match среди всех нарушений
        """
        error = best_match(self._validator.iter_errors(data))
        if error is not None:
            raise error
        return data


RATIONAL_CONTRACT: Final[NumericContract] = NumericContract("rational")
COMPLEX_CONTRACT: Final[NumericContract] = NumericContract("complex")


def validate_rational_contract(data: Dict[str, Any]) -> Dict[str, Any]:
    """Проверка {"num", "den"} против rational.json."""
    return RATIONAL_CONTRACT.check(data)


def validate_complex_contract(data: Dict[str, Any]) -> Dict[str, Any]:
    """Проверка {"real", "imaginary"} против complex.json."""
    return COMPLEX_CONTRACT.check(data)
