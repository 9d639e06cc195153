# --- Purpose: Read-only row and column windows into a captured storage. ---

import operator
from collections.abc import Sequence

from .errors import IndexOutOfRangeError
from .formatting import format_sequence
from .storage import Holder, Storage


class _LineView(Sequence):
    """
    Shared machinery for Row and Column.

    A view keeps a strong reference to the exact Storage it was taken from and
    registers as one of its holders. If the originating matrix later copies on
    write, the view keeps reading the old buffer: it shows the contents as of
    the moment it was taken, never the matrix's current state.
    """
    def __init__(self, storage: Storage, positions: range):
        self._storage = storage
        self._positions = positions
        self._holder = Holder()
        storage.attach(self._holder)

    def _offset(self, position: int) -> int:
        raise NotImplementedError

    @property
    def start_index(self) -> int:
        return self._positions.start

    @property
    def end_index(self) -> int:
        return self._positions.stop

    def get(self, position):
        """Accesses the element at the given position along the view."""
        position = operator.index(position)
        if position not in self._positions:
            raise IndexOutOfRangeError(
                f"position {position} out of range [{self.start_index}, {self.end_index})")
        return self._storage.buffer[self._offset(position)]

    def __getitem__(self, position):
        return self.get(position)

    def __len__(self):
        return len(self._positions)

    def __iter__(self):
        buffer = self._storage.buffer
        for position in self._positions:
            yield buffer[self._offset(position)]

    def __str__(self):
        return format_sequence(self)


class Row(_LineView):
    """A view on a specific row of a matrix."""

    def __init__(self, storage: Storage, row_index: int, column_indices: range):
        super().__init__(storage, column_indices)
        self.row_index = row_index

    @property
    def column_indices(self) -> range:
        return self._positions

    def _offset(self, position: int) -> int:
        return self.row_index * self._storage.column_count + position

    def __repr__(self):
        return f"Row(row_index={self.row_index}, elements={format_sequence(self)})"


class Column(_LineView):
    """A view on a specific column of a matrix."""

    def __init__(self, storage: Storage, column_index: int, row_indices: range):
        super().__init__(storage, row_indices)
        self.column_index = column_index

    @property
    def row_indices(self) -> range:
        return self._positions

    def _offset(self, position: int) -> int:
        return position * self._storage.column_count + self.column_index

    def __repr__(self):
        return f"Column(column_index={self.column_index}, elements={format_sequence(self)})"
