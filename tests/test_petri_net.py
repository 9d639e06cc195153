"""
Tests for the Petri net demo, a consumer of the public Matrix API.
"""

import unittest
import io
import os
import sys
from contextlib import redirect_stdout

import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cowmatrix import Matrix
import main as petri_net


class TestPetriNet(unittest.TestCase):
    """Test cases for marking computations."""

    def setUp(self):
        self.c = petri_net.incidence_matrix()
        self.m0 = petri_net.initial_marking()

    def test_shapes(self):
        """Test the dimensions of the net's matrices."""
        self.assertEqual(self.c.shape, (7, 4))
        self.assertEqual(self.m0.shape, (7, 1))
        self.assertEqual(self.m0.transposed, Matrix(rows=[[1, 0, 1, 0, 1, 0, 3]]))

    def test_firing_nothing_keeps_marking(self):
        """Test that m0 + C * 0 == m0."""
        s = Matrix.repeating(0, 4, 1)
        self.assertTrue(s.is_zero)
        self.assertEqual(self.m0 + self.c * s, self.m0)

    def test_single_transition(self):
        """Test firing the first transition once."""
        s = Matrix(columns=[[1, 0, 0, 0]])
        m1 = petri_net.reachable_marking(self.m0, self.c, s)
        self.assertEqual(m1, Matrix(columns=[[0, 1, 1, 0, 0, 1, 2]]))

    def test_place_invariants_hold(self):
        """Test that token sums over p0+p1 and p2+p3 are conserved."""
        rng = np.random.default_rng(1234)
        for _ in range(5):
            s = petri_net.random_firing_counts(4, rng)
            m1 = petri_net.reachable_marking(self.m0, self.c, s)
            self.assertEqual(m1[0, 0] + m1[1, 0], 1)
            self.assertEqual(m1[2, 0] + m1[3, 0], 1)

    def test_random_firing_counts(self):
        """Test that firing counts are in range and reproducible by seed."""
        s1 = petri_net.random_firing_counts(4, np.random.default_rng(7))
        s2 = petri_net.random_firing_counts(4, np.random.default_rng(7))

        self.assertEqual(s1.shape, (4, 1))
        self.assertEqual(s1, s2)
        for value in s1.column(0):
            self.assertTrue(0 <= value < petri_net.MAX_FIRINGS)

    def test_main_prints_marking(self):
        """Test that main() prints the reached marking."""
        out = io.StringIO()
        with redirect_stdout(out):
            m1 = petri_net.main(seed=42)

        self.assertEqual(m1.shape, (7, 1))
        self.assertEqual(out.getvalue().rstrip("\n"), str(m1))


if __name__ == '__main__':
    unittest.main()
