"""Product domain exceptions.

Raised by the Service Layer when a request cannot be fulfilled.
The API layer (Views) catches these and translates them into
the per-endpoint HTTP responses.
"""

from __future__ import annotations


class InvalidProductInput(Exception):
    """The request is missing a required value or carries a malformed one.

    Detected locally, before any I/O.  ``str(exc)`` is the user-facing
    message (e.g. ``"Price must be a positive number"``).
    """


class ProductNotFound(Exception):
    """No product matches the requested slug or id."""


class ProductPersistenceError(Exception):
    """Reading the uploaded photo or talking to the store failed.

    The message is the user-facing summary for the failed operation; the
    underlying fault is chained as ``__cause__``.
    """

    @property
    def error(self) -> str:
        """Text of the underlying fault, for diagnostics in responses."""
        cause = self.__cause__
        return str(cause) if cause is not None else str(self)
