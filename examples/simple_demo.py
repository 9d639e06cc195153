#!/usr/bin/env python3
"""
Simple cowmatrix Demo

A minimal example showing copy-on-write handles, views and arithmetic.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fractions import Fraction

from cowmatrix import Matrix

a = Matrix(rows=[[1, 2], [3, 4]])
b = Matrix(rows=[[5, 6], [7, 8]])

print("Matrix a:")
print(a)

print("\nMatrix b:")
print(b)

print("\na * b:")
print(a * b)

# Handles share storage until one of them writes
c = a.copy()
first_row = a.row(0)
c[0, 0] = 100

print(f"\nAfter c[0, 0] = 100: a[0, 0] = {a[0, 0]}, c[0, 0] = {c[0, 0]}")
print(f"Row view taken before the write still reads {first_row}")

# Any element type with the usual operators works
halves = a.map(lambda x: Fraction(x, 2))
print("\na / 2 as fractions:")
print(halves)

print("\nTransposed:")
print(a.transposed)

print("\n✓ Success!")
