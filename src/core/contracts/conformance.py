"""
Conformance — прогон golden-векторов против битовых операций

Файл векторов (contracts/vectors/*.json) валидируется по схеме
bit_vector.json, затем каждый case вызывается как op(*args, utype)
и сравнивается с expected (или с ожидаемым исключением error).

Расхождения не прерывают прогон: они собираются в ConformanceReport
и логируются как WARNING.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Final, List, Optional, Union

from pydantic import BaseModel, Field

from src.core.bits import counting, limits, power_of_two, rotation
from src.core.contracts.validators import validate_bit_vector

logger = logging.getLogger(__name__)

# =============================================================================
# ТАБЛИЦА ОПЕРАЦИЙ
# =============================================================================

# op name → (callable, число аргументов без utype)
OPERATIONS: Final[Dict[str, tuple[Callable[..., Any], int]]] = {
    "countr_zero": (counting.countr_zero, 1),
    "countl_zero": (counting.countl_zero, 1),
    "countr_one": (counting.countr_one, 1),
    "countl_one": (counting.countl_one, 1),
    "first_leading_zero": (counting.first_leading_zero, 1),
    "first_leading_one": (counting.first_leading_one, 1),
    "first_trailing_zero": (counting.first_trailing_zero, 1),
    "first_trailing_one": (counting.first_trailing_one, 1),
    "has_single_bit": (power_of_two.has_single_bit, 1),
    "bit_width": (power_of_two.bit_width, 1),
    "bit_floor": (power_of_two.bit_floor, 1),
    "bit_ceil": (power_of_two.bit_ceil, 1),
    "rotl": (rotation.rotl, 2),
    "rotr": (rotation.rotr, 2),
}

# Имена исключений, допустимые в поле error
ERRORS: Final[Dict[str, type]] = {
    "BitCeilOverflowError": limits.BitCeilOverflowError,
    "BitValueError": limits.BitValueError,
    "BitTypeError": limits.BitTypeError,
}


# =============================================================================
# MODELS
# =============================================================================


class ConformanceMismatch(BaseModel):
    """Расхождение одного case с ожиданием"""

    index: int = Field(..., ge=0, description="Индекс case в файле")
    op: str = Field(..., description="Имя операции")
    args: List[int] = Field(..., description="Аргументы без utype")
    expected: str = Field(..., description="Ожидаемый результат (repr или имя исключения)")
    actual: str = Field(..., description="Фактический результат (repr или имя исключения)")

    model_config = {"frozen": True}


class ConformanceReport(BaseModel):
    """Итог прогона файла векторов"""

    type_name: str = Field(..., description="Имя беззнакового типа")
    total: int = Field(..., ge=0)
    passed: int = Field(..., ge=0)
    mismatches: List[ConformanceMismatch] = Field(default_factory=list)
    source: Optional[str] = Field(None, description="Путь к файлу векторов")

    model_config = {"frozen": True}

    @property
    def ok(self) -> bool:
        return not self.mismatches


# =============================================================================
# ПРОГОН
# =============================================================================


def _run_case(fn: Callable[..., Any], args: List[int], utype: limits.UnsignedType) -> tuple[str, Any]:
    try:
        return "value", fn(*args, utype)
    except (limits.BitTypeError, limits.BitValueError) as e:
        return "error", e


def run_conformance(data: Dict[str, Any], source: Optional[str] = None) -> ConformanceReport:
    """
    Прогон golden-векторов.

    Args:
        data: Содержимое файла векторов (dict по схеме bit_vector)
        source: Путь к файлу (для отчёта)

    Returns:
        ConformanceReport с расхождениями

    Raises:
        ValidationError: Если data не соответствует схеме
        ValueError: Если число аргументов не совпадает с арностью op
    """
    validate_bit_vector(data)
    utype = limits.unsigned_type_for_name(data["type"])

    mismatches: List[ConformanceMismatch] = []
    for index, case in enumerate(data["cases"]):
        fn, arity = OPERATIONS[case["op"]]
        args = case["args"]
        if len(args) != arity:
            raise ValueError(
                f"case {index}: {case['op']} takes {arity} argument(s), got {len(args)}"
            )

        kind, outcome = _run_case(fn, args, utype)

        if "error" in case:
            expected_error = ERRORS[case["error"]]
            if kind == "error" and isinstance(outcome, expected_error):
                continue
            expected_repr = case["error"]
        else:
            # bool и int различаются: True != 1 для has_single_bit
            if kind == "value" and outcome == case["expected"] and type(outcome) is type(case["expected"]):
                continue
            expected_repr = repr(case["expected"])

        actual_repr = type(outcome).__name__ if kind == "error" else repr(outcome)
        mismatch = ConformanceMismatch(
            index=index, op=case["op"], args=args, expected=expected_repr, actual=actual_repr
        )
        logger.warning(
            "Conformance mismatch %s[%d] %s%s: expected %s, got %s",
            data["type"], index, case["op"], tuple(args), expected_repr, actual_repr,
        )
        mismatches.append(mismatch)

    total = len(data["cases"])
    report = ConformanceReport(
        type_name=utype.name,
        total=total,
        passed=total - len(mismatches),
        mismatches=mismatches,
        source=source,
    )
    logger.debug("Conformance %s: %d/%d passed", utype.name, report.passed, report.total)
    return report


def load_vector_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Загрузка и валидация файла векторов.

    Raises:
        FileNotFoundError: Если файл не найден
        ValidationError: Если содержимое не соответствует схеме
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    validate_bit_vector(data)
    return data


def run_vector_file(path: Union[str, Path]) -> ConformanceReport:
    """Загрузка файла векторов и прогон всех case."""
    return run_conformance(load_vector_file(path), source=str(path))


def default_vector_dir() -> Path:
    """contracts/vectors/ относительно корня проекта."""
    return Path(__file__).parent.parent.parent.parent / "contracts" / "vectors"
