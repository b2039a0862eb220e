"""
Тесты для прогона golden-векторов (Conformance)

Проверяет:
1. Все поставляемые файлы векторов проходят без расхождений
2. Расхождения собираются в отчёт и логируются
3. Ожидаемые исключения засчитываются
4. Невалидные данные отвергаются до прогона
"""

import logging
from pathlib import Path

import pytest
from jsonschema import ValidationError

from src.core.bits import configure_intrinsics, reset_intrinsics_config
from src.core.contracts import (
    OPERATIONS,
    ConformanceReport,
    default_vector_dir,
    load_vector_file,
    run_conformance,
    run_vector_file,
)

VECTOR_FILES = sorted(Path(default_vector_dir()).glob("*.json"))


@pytest.fixture(autouse=True)
def _default_intrinsics():
    reset_intrinsics_config()
    yield
    reset_intrinsics_config()


def make_vector(*cases, type_name: str = "u8") -> dict:
    return {"schema_version": "1", "type": type_name, "cases": list(cases)}


class TestShippedVectors:
    """Поставляемые golden-векторы"""

    @pytest.mark.parametrize("path", VECTOR_FILES, ids=lambda p: p.stem)
    @pytest.mark.parametrize("enabled", [True, False], ids=["intrinsics", "bisection"])
    def test_vector_file_passes(self, path, enabled) -> None:
        configure_intrinsics(enabled=enabled)
        report = run_vector_file(path)
        assert report.ok, report.mismatches
        assert report.passed == report.total
        assert report.source == str(path)

    def test_expected_files_present(self) -> None:
        assert {p.stem for p in VECTOR_FILES} >= {"u8", "u32", "u64", "u128"}

    def test_every_operation_covered(self) -> None:
        ops = set()
        for path in VECTOR_FILES:
            ops.update(case["op"] for case in load_vector_file(path)["cases"])
        assert ops == set(OPERATIONS)


class TestRunConformance:
    """run_conformance на синтетических данных"""

    def test_all_pass(self) -> None:
        report = run_conformance(
            make_vector(
                {"op": "bit_floor", "args": [5], "expected": 4},
                {"op": "rotr", "args": [3, 1], "expected": 129},
            )
        )
        assert isinstance(report, ConformanceReport)
        assert report.type_name == "u8"
        assert report.ok
        assert report.total == 2

    def test_value_mismatch_reported(self, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="src.core.contracts.conformance"):
            report = run_conformance(make_vector({"op": "bit_width", "args": [5], "expected": 4}))

        assert not report.ok
        assert report.passed == 0
        mismatch = report.mismatches[0]
        assert (mismatch.op, mismatch.args, mismatch.expected, mismatch.actual) == (
            "bit_width",
            [5],
            "4",
            "3",
        )
        assert "Conformance mismatch" in caplog.text

    def test_bool_not_equal_to_int(self) -> None:
        report = run_conformance(make_vector({"op": "has_single_bit", "args": [1], "expected": 1}))
        assert not report.ok
        assert report.mismatches[0].actual == "True"

    def test_expected_error_counted_as_pass(self) -> None:
        report = run_conformance(
            make_vector({"op": "countr_zero", "args": [1 << 32], "error": "BitValueError"}, type_name="u32")
        )
        assert report.ok

    def test_unexpected_error_reported(self) -> None:
        report = run_conformance(make_vector({"op": "bit_ceil", "args": [200], "expected": 256}))
        assert report.mismatches[0].actual == "BitCeilOverflowError"

    def test_missing_error_reported(self) -> None:
        report = run_conformance(make_vector({"op": "bit_ceil", "args": [100], "error": "BitCeilOverflowError"}))
        assert report.mismatches[0].expected == "BitCeilOverflowError"
        assert report.mismatches[0].actual == "128"

    def test_wrong_arity_rejected(self) -> None:
        with pytest.raises(ValueError, match="takes 2 argument"):
            run_conformance(make_vector({"op": "rotl", "args": [1], "expected": 2}))

    def test_invalid_data_rejected(self) -> None:
        with pytest.raises(ValidationError):
            run_conformance({"schema_version": "1", "type": "u8"})

    def test_wide_type(self) -> None:
        report = run_conformance(
            make_vector({"op": "countl_zero", "args": [1], "expected": 255}, type_name="u256")
        )
        assert report.ok
