"""
Unit tests for matrix text rendering.
"""

import unittest
import os
import sys

import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cowmatrix import Matrix
from cowmatrix.formatting import describe, debug_describe, format_value, format_sequence


class TestDescribe(unittest.TestCase):
    """Test cases for the display form."""

    def test_empty_matrix(self):
        """Test that the empty matrix renders as ()."""
        self.assertEqual(str(Matrix()), "()")
        self.assertEqual(describe(Matrix(rows=[[]])), "()")

    def test_single_row(self):
        """Test that a single row is rendered inline between parentheses."""
        self.assertEqual(str(Matrix(rows=[[1, 2, 3]])), "( 1  2  3 )")
        self.assertEqual(str(Matrix(rows=[[42]])), "( 42 )")

    def test_columns_are_right_aligned(self):
        """Test that every column is padded to its widest element."""
        matrix = Matrix(rows=[[1, 22], [333, 4]])
        expected = (
            "⎛   1  22 ⎞\n"
            "⎝ 333   4 ⎠"
        )
        self.assertEqual(str(matrix), expected)

    def test_interior_rows_use_side_brackets(self):
        """Test the bracket glyphs of a tall matrix."""
        matrix = Matrix(columns=[[1, -2, 30, 4]])
        expected = (
            "⎛  1 ⎞\n"
            "⎜ -2 ⎟\n"
            "⎜ 30 ⎟\n"
            "⎝  4 ⎠"
        )
        self.assertEqual(str(matrix), expected)

    def test_all_lines_have_equal_width(self):
        """Test that the rendered block is rectangular."""
        matrix = Matrix(rows=[[1.5, -20, 3], [400, 5, 6.25], [7, 8, 9]])
        lengths = {len(line) for line in str(matrix).split("\n")}
        self.assertEqual(len(lengths), 1)

    def test_numpy_scalars_render_plainly(self):
        """Test that numpy element types render like Python numbers."""
        matrix = Matrix(rows=[[1.5, 2.0]], dtype=np.float64)
        self.assertEqual(str(matrix), "( 1.5  2.0 )")


class TestDebugDescribe(unittest.TestCase):
    """Test cases for the repr form."""

    def test_repr_lists_rows(self):
        """Test that repr shows every row with element reprs."""
        self.assertEqual(repr(Matrix(rows=[[1, 2], [3, 4]])), "Matrix(rows=[[1, 2], [3, 4]])")
        self.assertEqual(repr(Matrix(rows=[["a"]])), "Matrix(rows=[['a']])")
        self.assertEqual(debug_describe(Matrix()), "Matrix(rows=[])")

    def test_repr_unwraps_numpy_scalars(self):
        """Test that numpy scalars are shown as plain values."""
        matrix = Matrix(rows=[[1, 2]], dtype=np.int64)
        self.assertEqual(repr(matrix), "Matrix(rows=[[1, 2]])")

    def test_repr_round_trips(self):
        """Test that evaluating the repr rebuilds an equal matrix."""
        matrix = Matrix(rows=[[1, -2], [3.5, 4]])
        self.assertEqual(eval(repr(matrix), {"Matrix": Matrix}), matrix)


class TestFormattingHelpers(unittest.TestCase):
    """Test cases for the value and sequence helpers."""

    def test_format_value(self):
        self.assertEqual(format_value(3), "3")
        self.assertEqual(format_value(np.float32(0.5)), "0.5")
        self.assertEqual(format_value("x"), "x")

    def test_format_sequence(self):
        self.assertEqual(format_sequence([]), "[]")
        self.assertEqual(format_sequence([1, "b"]), "[1, 'b']")


if __name__ == '__main__':
    unittest.main()
