"""Typed service errors.

Services raise these instead of leaking storage exceptions; the HTTP
layer maps them to status codes. Absence is not an error: lookups return
``None`` and deletes return ``False``.
"""


class SweemError(Exception):
    """Base class for expected, client-caused failures."""


class ValidationError(SweemError, ValueError):
    """Malformed or semantically invalid input (empty name, dangling reference, bad dates)."""


class ConflictError(SweemError):
    """Uniqueness violation or a delete refused by an integrity rule."""
