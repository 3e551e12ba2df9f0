"""Exceptions raised by the storage and retrieval layers.

Expected outcomes of a retrieval (record not found, password required,
password rejected) are plain values and never appear here.
"""


class PadlockError(Exception):
    """Base class for service errors."""


class PersistenceError(PadlockError):
    """The record store or byte store could not complete an operation."""


class RetrievalFailed(PadlockError):
    """An approved download could not be recorded or delivered."""


class InvalidCredentialFormat(PadlockError):
    """A stored password hash is malformed."""
