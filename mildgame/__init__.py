"""A top-down arcade shooter where you drift toward the pointer and shoot approaching enemies."""

__version__ = "0.1.0"