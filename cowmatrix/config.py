# cowmatrix/config.py
"""
Centralized configuration for the cowmatrix library.
This module provides a single source of truth for all configurable parameters.
"""

# Element storage
DEFAULT_DTYPE = object  # Buffers hold Python objects unless a numpy dtype is requested

# Arithmetic
ADDITIVE_IDENTITY = 0  # Equal to, and an identity for, every type in the numeric tower

# Text rendering
EMPTY_DESCRIPTION = "()"
COLUMN_SEPARATOR = "  "
TOP_BRACKETS = ("⎛ ", " ⎞")
SIDE_BRACKETS = ("⎜ ", " ⎟")
BOTTOM_BRACKETS = ("⎝ ", " ⎠")
SINGLE_ROW_BRACKETS = ("( ", " )")

# Observability
PROFILING_ENABLED = False  # The global profiler records nothing until enabled
