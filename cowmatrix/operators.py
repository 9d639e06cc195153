"""
Arithmetic and comparison operators for Matrix.

Everything here is expressed against the Matrix/Storage primitives: results
are built through ``Matrix.from_initializer`` into fresh storage, except the
in-place variants, which write straight into the left operand's existing
storage without a copy-on-write check.

Element types only need the Python operators they are used with: ``==`` for
equality, ``+``/``-`` for the elementwise operators, ``*`` and ``+`` for the
matrix product. The additive identity defaults to the integer 0, which is
equal to, and an identity for, every type in the numeric tower (int, float,
Fraction, Decimal, complex) and numpy scalars.
"""

import logging

import numpy as np

from .config import ADDITIVE_IDENTITY
from .errors import DimensionMismatchError, IncompatibleDtypeError, check_same_shape
from .observability import get_profiler

logger = logging.getLogger(__name__)

_profiler = get_profiler()


def _elements(matrix):
    return matrix._storage.buffer


def _same(x, y) -> bool:
    # Elements such as numpy arrays compare elementwise; all parts must agree
    return bool(np.all(x == y))


# ============================================================================
# Comparison
# ============================================================================

def equal(lhs, rhs) -> bool:
    """
    Two matrices are equal iff their dimensions match and every element,
    compared in row-major order, is equal. Storage identity is irrelevant.
    """
    if lhs.row_count != rhs.row_count or lhs.column_count != rhs.column_count:
        return False
    return all(_same(x, y) for x, y in zip(_elements(lhs), _elements(rhs)))


def hash_matrix(matrix) -> int:
    """Combines the dimensions, then every element in row-major order."""
    return hash((matrix.row_count, matrix.column_count, *_elements(matrix)))


def is_zero(matrix, zero=ADDITIVE_IDENTITY) -> bool:
    """Returns whether every element equals the additive identity."""
    return all(_same(x, zero) for x in _elements(matrix))


# ============================================================================
# Elementwise arithmetic
# ============================================================================

def _elementwise(lhs, rhs, combine, operation: str):
    check_same_shape(lhs, rhs, operation)
    a, b = _elements(lhs), _elements(rhs)

    def initializer(elements):
        for i in range(len(elements)):
            elements[i] = combine(a[i], b[i])

    return type(lhs).from_initializer(
        lhs.row_count, lhs.column_count, initializer,
        dtype=np.result_type(a.dtype, b.dtype),
    )


@_profiler.profile_decorator("matrix.add")
def add(lhs, rhs):
    """Computes the component-wise sum of two matrices into new storage."""
    return _elementwise(lhs, rhs, lambda x, y: x + y, "addition")


@_profiler.profile_decorator("matrix.subtract")
def subtract(lhs, rhs):
    """Computes the component-wise difference ``lhs - rhs`` into new storage."""
    return _elementwise(lhs, rhs, lambda x, y: x - y, "subtraction")


def _elementwise_in_place(lhs, rhs, combine, operation: str):
    check_same_shape(lhs, rhs, operation)
    storage = lhs._storage
    result_dtype = np.result_type(storage.dtype, rhs.dtype)
    if not np.can_cast(result_dtype, storage.dtype, casting='same_kind'):
        raise IncompatibleDtypeError(
            f"In-place {operation} cannot store {result_dtype} results "
            f"in a {storage.dtype} matrix; use the non-in-place operator instead"
        )
    if storage.holder_count > 1:
        logger.debug(f"In-place {operation} on storage shared by {storage.holder_count} holders")
    a, b = storage.buffer, _elements(rhs)
    for i in range(storage.size):
        a[i] = combine(a[i], b[i])
    return lhs


@_profiler.profile_decorator("matrix.add_in_place")
def add_in_place(lhs, rhs):
    """
    Adds ``rhs`` into ``lhs`` component-wise, writing directly into the
    storage ``lhs`` currently references.

    No copy-on-write check is made: every other matrix handle or view that
    shares the storage observes the change. Callers must own the storage
    uniquely or intend the aliasing.

    The left operand keeps its dtype, so the combined dtype of both operands
    must be castable to it under numpy's ``same_kind`` rule (an int64
    matrix cannot take float64 sums); otherwise IncompatibleDtypeError is
    raised and nothing is written.
    """
    return _elementwise_in_place(lhs, rhs, lambda x, y: x + y, "addition")


@_profiler.profile_decorator("matrix.subtract_in_place")
def subtract_in_place(lhs, rhs):
    """
    Subtracts ``rhs`` from ``lhs`` component-wise in the existing storage.
    Same aliasing contract as ``add_in_place``.
    """
    return _elementwise_in_place(lhs, rhs, lambda x, y: x - y, "subtraction")


# ============================================================================
# Matrix product
# ============================================================================

@_profiler.profile_decorator("matrix.multiply")
def multiply(lhs, rhs, zero=ADDITIVE_IDENTITY):
    """
    Computes the matrix product of ``lhs`` (m x n) and ``rhs`` (n x p).

    The result storage is filled with ``zero`` first, then each cell
    accumulates ``lhs[i, k] * rhs[k, j]`` in increasing ``k`` so that
    floating-point sums are reproducible.
    """
    if lhs.column_count != rhs.row_count:
        raise DimensionMismatchError(
            f"Inner dimensions must match for multiplication: "
            f"{lhs.row_count}x{lhs.column_count} * {rhs.row_count}x{rhs.column_count}"
        )

    a, b = _elements(lhs), _elements(rhs)
    rows, inner, cols = lhs.row_count, lhs.column_count, rhs.column_count

    def initializer(elements):
        elements.fill(zero)
        for i in range(rows):
            for j in range(cols):
                c = i * cols + j
                for k in range(inner):
                    elements[c] = elements[c] + a[i * inner + k] * b[k * cols + j]

    return type(lhs).from_initializer(
        rows, cols, initializer, dtype=np.result_type(a.dtype, b.dtype),
    )
