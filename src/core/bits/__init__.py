"""
Core bits modules

Битовые примитивы для беззнаковых целых фиксированной ширины.
"""

# Numeric Limits
from src.core.bits.limits import (
    # Width constants
    MAX_DIGITS,
    MIN_DIGITS,
    SUPPORTED_WIDTHS,
    # Exceptions
    BitCastError,
    BitCeilOverflowError,
    BitTypeError,
    BitValueError,
    # Types
    NumericLimits,
    ScalarKind,
    ScalarType,
    UnsignedType,
    # Predefined descriptors
    F16,
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    U8,
    U16,
    U32,
    U64,
    U128,
    # Functions
    as_scalar,
    bytes_type,
    numeric_limits,
    unsigned_type_for_name,
    unsigned_type_for_width,
)

# Intrinsics
from src.core.bits.intrinsics import (
    DEFAULT_INTRINSIC_WIDTHS,
    IntrinsicOp,
    IntrinsicsConfig,
    clear_intrinsics,
    configure_intrinsics,
    get_intrinsics_config,
    lookup_intrinsic,
    register_intrinsic,
    reset_intrinsics_config,
    unregister_intrinsic,
)

# Sanitizer interop
from src.core.bits.sanitizer import (
    get_unpoison_hook,
    reset_unpoison_hook,
    set_unpoison_hook,
    unpoison,
)

# Counting
from src.core.bits.counting import (
    countl_one,
    countl_zero,
    countr_one,
    countr_zero,
    first_leading_one,
    first_leading_zero,
    first_trailing_one,
    first_trailing_zero,
)

# Power of two
from src.core.bits.power_of_two import (
    bit_ceil,
    bit_floor,
    bit_width,
    has_single_bit,
)

# Rotation
from src.core.bits.rotation import rotl, rotr

# Reinterpret
from src.core.bits.reinterpret import RawFloat, bit_cast, bit_or_static_cast

__all__ = [
    # Numeric Limits — Constants
    "MAX_DIGITS",
    "MIN_DIGITS",
    "SUPPORTED_WIDTHS",
    # Numeric Limits — Exceptions
    "BitCastError",
    "BitCeilOverflowError",
    "BitTypeError",
    "BitValueError",
    # Numeric Limits — Types
    "NumericLimits",
    "ScalarKind",
    "ScalarType",
    "UnsignedType",
    "F16",
    "F32",
    "F64",
    "I8",
    "I16",
    "I32",
    "I64",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    # Numeric Limits — Functions
    "as_scalar",
    "bytes_type",
    "numeric_limits",
    "unsigned_type_for_name",
    "unsigned_type_for_width",
    # Intrinsics
    "DEFAULT_INTRINSIC_WIDTHS",
    "IntrinsicOp",
    "IntrinsicsConfig",
    "clear_intrinsics",
    "configure_intrinsics",
    "get_intrinsics_config",
    "lookup_intrinsic",
    "register_intrinsic",
    "reset_intrinsics_config",
    "unregister_intrinsic",
    # Sanitizer interop
    "get_unpoison_hook",
    "reset_unpoison_hook",
    "set_unpoison_hook",
    "unpoison",
    # Counting
    "countl_one",
    "countl_zero",
    "countr_one",
    "countr_zero",
    "first_leading_one",
    "first_leading_zero",
    "first_trailing_one",
    "first_trailing_zero",
    # Power of two
    "bit_ceil",
    "bit_floor",
    "bit_width",
    "has_single_bit",
    # Rotation
    "rotl",
    "rotr",
    # Reinterpret
    "RawFloat",
    "bit_cast",
    "bit_or_static_cast",
]
