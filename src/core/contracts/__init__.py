"""
Contract Validation Module

Валидация JSON контрактов (golden-векторы) и прогон conformance.
"""

from .validators import (
    BitVectorValidator,
    ContractValidator,
    SchemaLoader,
    default_schema_loader,
    validate_bit_vector,
)
from .conformance import (
    OPERATIONS,
    ConformanceMismatch,
    ConformanceReport,
    default_vector_dir,
    load_vector_file,
    run_conformance,
    run_vector_file,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "BitVectorValidator",
    "ConformanceMismatch",
    "ConformanceReport",
    # Constants
    "OPERATIONS",
    # Functions
    "validate_bit_vector",
    "default_schema_loader",
    "default_vector_dir",
    "load_vector_file",
    "run_conformance",
    "run_vector_file",
]
