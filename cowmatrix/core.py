# --- Purpose: The value-semantic matrix handle with copy-on-write storage. ---

import copy
import logging
from typing import Any, Callable, Iterable, Tuple

import numpy as np

from . import operators
from .config import ADDITIVE_IDENTITY, DEFAULT_DTYPE
from .errors import DimensionMismatchError, InvalidDimensionError, check_index
from .formatting import debug_describe, describe
from .storage import Holder, Storage
from .views import Column, Row

logger = logging.getLogger(__name__)


class Matrix:
    """
    A two-dimensional matrix of elements with value semantics.

    Copying a handle (``m.copy()`` or ``copy.copy(m)``) is cheap: both handles
    share one Storage until one of them writes through ``set``, at which point
    the writer clones the buffer and the other handles are left untouched.

    Elements are stored in a contiguous row-major buffer. Any Python object can
    be an element; arithmetic uses the elements' own operators.

    Example:
        >>> a = Matrix(rows=[[1, 2], [3, 4]])
        >>> b = a.copy()
        >>> b[0, 0] = 10
        >>> a[0, 0]
        1
        >>> print(a * Matrix(rows=[[5, 6], [7, 8]]))
        ⎛ 19  22 ⎞
        ⎝ 43  50 ⎠
    """

    def __init__(self, rows: Iterable[Iterable[Any]] = None,
                 columns: Iterable[Iterable[Any]] = None, dtype=DEFAULT_DTYPE):
        """
        Initialize a Matrix from rows or columns; with neither, the empty matrix.

        Args:
            rows: A sequence of rows, where each row is a sequence of elements
            columns: A sequence of columns, where each column is a sequence of elements
            dtype: numpy dtype of the underlying buffer (``object`` by default)
        """
        if rows is not None and columns is not None:
            raise ValueError("Provide either rows or columns, not both")

        if rows is not None:
            source = type(self).from_rows(rows, dtype=dtype)
        elif columns is not None:
            source = type(self).from_columns(columns, dtype=dtype)
        else:
            source = type(self).from_initializer(0, 0, None, dtype=dtype)

        self._holder = Holder()
        self._bind(source._storage)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def _wrap(cls, storage: Storage) -> 'Matrix':
        """Internal constructor binding a new handle to existing storage."""
        obj = cls.__new__(cls)
        obj._holder = Holder()
        obj._bind(storage)
        return obj

    @classmethod
    def from_initializer(cls, row_count: int, column_count: int,
                         initializer: Callable[[np.ndarray], None],
                         dtype=DEFAULT_DTYPE) -> 'Matrix':
        """
        Creates a matrix with the specified number of rows and columns, then
        calls ``initializer`` with the matrix's flat, writable buffer.

        The buffer holds ``row_count * column_count`` slots in row-major order
        and the initializer must fill every one of them. When either dimension
        is zero the result is the empty 0x0 matrix and the initializer is not
        called. Exceptions raised by the initializer propagate.
        """
        storage = Storage.allocate(row_count, column_count, dtype=dtype)
        if storage.size > 0:
            initializer(storage.buffer)
        return cls._wrap(storage)

    @classmethod
    def repeating(cls, value: Any, row_count: int, column_count: int,
                  dtype=DEFAULT_DTYPE) -> 'Matrix':
        """Creates a matrix containing a single value repeated in every slot."""
        def initializer(elements):
            for i in range(len(elements)):
                elements[i] = value

        return cls.from_initializer(row_count, column_count, initializer, dtype=dtype)

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Any]], dtype=DEFAULT_DTYPE) -> 'Matrix':
        """
        Creates a matrix from a sequence of rows. The first row's length fixes
        the column count; every other row must have exactly that length.
        """
        rows = [list(row) for row in rows]
        column_count = len(rows[0]) if rows else 0
        for i, row in enumerate(rows):
            if len(row) != column_count:
                raise DimensionMismatchError(
                    f"row {i} has {len(row)} elements, expected {column_count}")

        def initializer(elements):
            for i, row in enumerate(rows):
                for j, value in enumerate(row):
                    elements[i * column_count + j] = value

        return cls.from_initializer(len(rows), column_count, initializer, dtype=dtype)

    @classmethod
    def from_columns(cls, columns: Iterable[Iterable[Any]], dtype=DEFAULT_DTYPE) -> 'Matrix':
        """
        Creates a matrix from a sequence of columns. The first column's length
        fixes the row count; every other column must have exactly that length.
        """
        columns = [list(column) for column in columns]
        row_count = len(columns[0]) if columns else 0
        for j, column in enumerate(columns):
            if len(column) != row_count:
                raise DimensionMismatchError(
                    f"column {j} has {len(column)} elements, expected {row_count}")

        column_count = len(columns)

        def initializer(elements):
            for j, column in enumerate(columns):
                for i, value in enumerate(column):
                    elements[i * column_count + j] = value

        return cls.from_initializer(row_count, column_count, initializer, dtype=dtype)

    @classmethod
    def from_numpy(cls, array) -> 'Matrix':
        """Creates a matrix holding a copy of a 2-D numpy array, keeping its dtype."""
        array = np.asarray(array)
        if array.ndim != 2:
            raise InvalidDimensionError("Matrices must be built from 2-dimensional arrays")

        flat = array.reshape(-1)

        def initializer(elements):
            elements[:] = flat

        return cls.from_initializer(array.shape[0], array.shape[1], initializer, dtype=array.dtype)

    # ------------------------------------------------------------------
    # Storage binding
    # ------------------------------------------------------------------

    def _bind(self, storage: Storage) -> None:
        self._storage = storage
        storage.attach(self._holder)

    def _rebind(self, storage: Storage) -> None:
        self._storage.detach(self._holder)
        self._bind(storage)

    def shares_storage_with(self, other) -> bool:
        """Returns whether ``other`` (a matrix or a view) reads the same buffer."""
        return self._storage is other._storage

    def copy(self) -> 'Matrix':
        """Returns a new handle sharing this matrix's storage until either writes."""
        return type(self)._wrap(self._storage)

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.map(lambda value: copy.deepcopy(value, memo), dtype=self.dtype)

    # ------------------------------------------------------------------
    # Dimensions
    # ------------------------------------------------------------------

    @property
    def row_count(self) -> int:
        """The number of rows in the matrix."""
        return self._storage.row_count

    @property
    def column_count(self) -> int:
        """The number of columns in the matrix."""
        return self._storage.column_count

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._storage.row_count, self._storage.column_count)

    @property
    def dtype(self) -> np.dtype:
        return self._storage.dtype

    @property
    def row_indices(self) -> range:
        """The indices that are valid for accessing rows."""
        return range(self._storage.row_count)

    @property
    def column_indices(self) -> range:
        """The indices that are valid for accessing columns."""
        return range(self._storage.column_count)

    @property
    def transposed(self) -> 'Matrix':
        """Returns this matrix transposed: its rows are this matrix's columns."""
        return type(self).from_rows(self.columns, dtype=self.dtype)

    # ------------------------------------------------------------------
    # Bulk access
    # ------------------------------------------------------------------

    def with_contiguous_storage(self, body: Callable[[np.ndarray], Any]) -> Any:
        """
        Calls ``body`` with a read-only view of the flat row-major buffer and
        returns its result. The view must not be kept past the call.
        """
        view = self._storage.buffer.view()
        view.flags.writeable = False
        return body(view)

    def to_numpy(self) -> np.ndarray:
        """Returns a 2-D numpy copy of the matrix."""
        return self._storage.buffer.reshape(self.row_count, self.column_count).copy()

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------

    def _checked_offset(self, row, column) -> int:
        row = check_index(row, self._storage.row_count, "row")
        column = check_index(column, self._storage.column_count, "column")
        return self._storage.offset(row, column)

    def get(self, row: int, column: int) -> Any:
        """Accesses the element at the specified row and column."""
        return self._storage.buffer[self._checked_offset(row, column)]

    def set(self, row: int, column: int, value: Any) -> None:
        """
        Writes the element at the specified row and column.

        If any other matrix handle or view shares this matrix's storage, the
        storage is cloned first and this handle is repointed at the clone; the
        other holders keep the old, unmodified buffer.
        """
        offset = self._checked_offset(row, column)
        if not self._storage.is_uniquely_held_by(self._holder):
            logger.debug(f"Copy-on-write: storage {self.row_count}x{self.column_count} "
                         f"is shared by {self._storage.holder_count} holders")
            self._rebind(self._storage.copy())
        self._storage.buffer[offset] = value

    @staticmethod
    def _split_key(key) -> Tuple[Any, Any]:
        if not (isinstance(key, tuple) and len(key) == 2):
            raise TypeError("matrix indices must be provided as [row, column]")
        return key

    def __getitem__(self, key):
        row, column = self._split_key(key)
        return self.get(row, column)

    def __setitem__(self, key, value):
        row, column = self._split_key(key)
        self.set(row, column, value)

    # ------------------------------------------------------------------
    # Row and column views
    # ------------------------------------------------------------------

    def row(self, index: int) -> Row:
        """Returns a view on the row at the specified index."""
        index = check_index(index, self._storage.row_count, "row")
        return Row(self._storage, index, self.column_indices)

    def column(self, index: int) -> Column:
        """Returns a view on the column at the specified index."""
        index = check_index(index, self._storage.column_count, "column")
        return Column(self._storage, index, self.row_indices)

    @property
    def rows(self):
        """A list with a view on every row of the matrix."""
        return [self.row(i) for i in self.row_indices]

    @property
    def columns(self):
        """A list with a view on every column of the matrix."""
        return [self.column(j) for j in self.column_indices]

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def map(self, transform: Callable[[Any], Any], dtype=DEFAULT_DTYPE) -> 'Matrix':
        """
        Returns a matrix containing the results of applying ``transform`` to
        each element, in row-major order. This matrix is never modified.
        """
        source = self._storage.buffer

        def initializer(elements):
            for i in range(len(elements)):
                elements[i] = transform(source[i])

        return type(self).from_initializer(self.row_count, self.column_count, initializer, dtype=dtype)

    # ------------------------------------------------------------------
    # Arithmetic and comparison
    # ------------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return operators.equal(self, other)

    def __hash__(self):
        return operators.hash_matrix(self)

    @property
    def is_zero(self) -> bool:
        """Whether every element equals the additive identity (0)."""
        return operators.is_zero(self, ADDITIVE_IDENTITY)

    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return operators.add(self, other)

    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return operators.subtract(self, other)

    def add_in_place(self, other: 'Matrix') -> 'Matrix':
        """
        Adds ``other`` into this matrix's current storage without a
        copy-on-write check. Every handle and view sharing the storage sees
        the result. ``+=`` is an alias for this method.
        """
        return operators.add_in_place(self, other)

    def subtract_in_place(self, other: 'Matrix') -> 'Matrix':
        """
        Subtracts ``other`` within this matrix's current storage without a
        copy-on-write check. ``-=`` is an alias for this method.
        """
        return operators.subtract_in_place(self, other)

    def __iadd__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add_in_place(other)

    def __isub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract_in_place(other)

    def __mul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return operators.multiply(self, other)

    __matmul__ = __mul__

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def __str__(self):
        return describe(self)

    def __repr__(self):
        return debug_describe(self)
