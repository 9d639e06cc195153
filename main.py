"""
Petri net demo.

Builds the incidence matrix of a small Petri net, starts from an initial
marking and computes the marking reached after firing a random sequence of
transitions: m1 = m0 + C * s, where s counts how often each transition fires.
"""

import numpy as np

from cowmatrix import Matrix

# Upper bound (exclusive) on how often a single transition fires
MAX_FIRINGS = 200


def incidence_matrix() -> Matrix:
    """The net's incidence matrix: one row per place, one column per transition."""
    return Matrix(rows=[
        [-1,  1,  0,  0],
        [ 1, -1,  0,  0],
        [ 0,  0, -1,  1],
        [ 0,  0,  1, -1],
        [-1,  1, -1,  1],
        [ 1,  0, -1,  0],
        [-1,  0,  1,  0],
    ])


def initial_marking() -> Matrix:
    """The initial marking as a single column vector."""
    return Matrix(columns=[[1, 0, 1, 0, 1, 0, 3]])


def random_firing_counts(transition_count: int, rng=None) -> Matrix:
    """A column vector with a random firing count for every transition."""
    rng = rng if rng is not None else np.random.default_rng()
    counts = [int(n) for n in rng.integers(0, MAX_FIRINGS, size=transition_count)]
    return Matrix(columns=[counts])


def reachable_marking(marking: Matrix, incidence: Matrix, firings: Matrix) -> Matrix:
    """Computes the marking obtained after firing ``firings`` from ``marking``."""
    return marking + incidence * firings


def main(seed=None):
    c = incidence_matrix()
    m0 = initial_marking()
    s = random_firing_counts(c.column_count, np.random.default_rng(seed))

    m1 = reachable_marking(m0, c, s)
    print(m1)
    return m1


if __name__ == "__main__":
    main()
