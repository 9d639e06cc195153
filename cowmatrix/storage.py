# --- Purpose: Owns the flat row-major buffer shared by matrix handles and views. ---

import logging
import weakref

import numpy as np

from .config import DEFAULT_DTYPE
from .errors import InvalidDimensionError

logger = logging.getLogger(__name__)


class Holder:
    """
    Identity token registered with a Storage by each matrix handle or view.
    Tokens compare by identity and die with their owner.
    """
    __slots__ = ("__weakref__",)


class Storage:
    """
    A single contiguous buffer of ``row_count * column_count`` elements laid
    out in row-major order: element (i, j) lives at offset i * column_count + j.

    Dimensions are fixed for the lifetime of the instance. A zero in either
    dimension is normalized to the canonical 0x0 form.
    """
    def __init__(self, row_count: int, column_count: int, dtype=DEFAULT_DTYPE):
        if row_count < 0:
            raise InvalidDimensionError(f"negative row count: {row_count}")
        if column_count < 0:
            raise InvalidDimensionError(f"negative column count: {column_count}")
        if row_count == 0 or column_count == 0:
            row_count = column_count = 0

        self.row_count = row_count
        self.column_count = column_count
        # Slots are uninitialized (None for object dtype); the caller fills them.
        self.buffer = np.empty(row_count * column_count, dtype=dtype)
        self._holders = weakref.WeakSet()

    @classmethod
    def allocate(cls, row_count: int, column_count: int, dtype=DEFAULT_DTYPE) -> 'Storage':
        """Allocate an uninitialized storage of the given dimensions."""
        return cls(row_count, column_count, dtype=dtype)

    @property
    def dtype(self) -> np.dtype:
        return self.buffer.dtype

    @property
    def size(self) -> int:
        return self.row_count * self.column_count

    def offset(self, row: int, column: int) -> int:
        return row * self.column_count + column

    def copy(self) -> 'Storage':
        """
        Returns a new storage of identical dimensions holding the same element
        values. Object elements are duplicated by reference, numeric dtypes by
        value.
        """
        clone = Storage(self.row_count, self.column_count, dtype=self.buffer.dtype)
        clone.buffer[:] = self.buffer
        logger.debug(f"Cloned storage {self.row_count}x{self.column_count} "
                     f"({self.holder_count} holders on the original)")
        return clone

    # -- Holder bookkeeping --

    def attach(self, holder: Holder) -> None:
        self._holders.add(holder)

    def detach(self, holder: Holder) -> None:
        self._holders.discard(holder)

    @property
    def holder_count(self) -> int:
        """Number of live matrix handles and views referencing this storage."""
        return len(self._holders)

    def is_uniquely_held_by(self, holder: Holder) -> bool:
        return len(self._holders) == 1 and holder in self._holders

    def __repr__(self):
        return (f"Storage(shape=({self.row_count}, {self.column_count}), "
                f"dtype={self.buffer.dtype}, holders={self.holder_count})")
