"""
errors.py

Responsibility: the common base for every error the CLI reports as a handled failure.

Each module defines its own subclass next to the code that raises it.
"""

from __future__ import annotations


class ModjoolError(RuntimeError):
    pass
