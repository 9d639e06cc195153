"""
Contract violations raised by cowmatrix.

Every failure in this package is a programming error at the call site:
ragged construction input, operands of incompatible shape or dtype, or
an index outside the matrix. None of them is transient or retryable;
callers are not expected to catch these.
"""

import operator


class ContractViolation(Exception):
    """Base class for all precondition failures."""


class DimensionMismatchError(ContractViolation, ValueError):
    """Operand or input dimensions do not agree."""


class IndexOutOfRangeError(ContractViolation, IndexError):
    """A row, column or view position lies outside the valid range."""


class InvalidDimensionError(ContractViolation, ValueError):
    """A requested dimension is negative or the input is not two-dimensional."""


class IncompatibleDtypeError(ContractViolation, TypeError):
    """An in-place result cannot be stored in the left operand's buffer dtype."""


def check_index(index, bound, axis: str) -> int:
    """Validate ``0 <= index < bound`` and return the index as an int."""
    # operator.index rejects floats, strings and slices with TypeError
    position = operator.index(index)
    if position < 0 or position >= bound:
        raise IndexOutOfRangeError(f"{axis} index {position} out of range [0, {bound})")
    return position


def check_same_shape(lhs, rhs, operation: str) -> None:
    """Require two matrices to have identical dimensions."""
    if lhs.row_count != rhs.row_count or lhs.column_count != rhs.column_count:
        raise DimensionMismatchError(
            f"Matrices must have the same shape for {operation}: "
            f"{lhs.row_count}x{lhs.column_count} vs {rhs.row_count}x{rhs.column_count}"
        )
