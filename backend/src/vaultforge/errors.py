"""Error types raised by the VaultForge core."""


class VaultError(Exception):
    """Base class for all VaultForge errors."""


class NotFound(VaultError):
    """A uuid-based lookup matched zero rows."""


class AmbiguousResult(VaultError):
    """A uuid-based lookup matched more than one row.

    Always a data-integrity bug elsewhere; never expected in normal operation.
    """


class TypeMismatch(VaultError):
    """A lifecycle operation received an object of the wrong concrete type."""

    def __init__(self, expected: type, actual: type):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Invalid object class given: expected {expected.__name__}, "
            f"got {actual.__name__}"
        )


class StorageFailure(VaultError):
    """The underlying query or persist call failed."""


class InvalidObject(VaultError):
    """An object failed validation before being persisted."""
