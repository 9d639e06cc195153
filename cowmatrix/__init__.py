"""
cowmatrix - generic dense matrices with copy-on-write value semantics.

    from cowmatrix import Matrix

    a = Matrix(rows=[[1, 2], [3, 4]])
    b = a.copy()        # shares storage with a
    b[0, 0] = 10        # b clones its storage; a is unchanged
    print(a * b.transposed)
"""

from .core import Matrix
from .views import Row, Column
from .storage import Storage
from .errors import (
    ContractViolation,
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidDimensionError,
    IncompatibleDtypeError,
)
from .observability import configure_logging, get_profiler

__all__ = [
    'Matrix',
    'Row',
    'Column',
    'Storage',
    'ContractViolation',
    'DimensionMismatchError',
    'IndexOutOfRangeError',
    'InvalidDimensionError',
    'IncompatibleDtypeError',
    'configure_logging',
    'get_profiler',
]
