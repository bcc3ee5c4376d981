"""
Exception taxonomy for the shortener core.

Caller errors (bad input) are recoverable and raised before any mutation.
Store errors signal a broken invariant and are escalated, never retried.
"""


class ShortenerError(Exception):
    """Base class for all shortener errors"""


class InvalidArgumentError(ShortenerError, ValueError):
    """Bad URL syntax, max_clicks or expiration_hours"""


class InvalidAliasError(ShortenerError, ValueError):
    """Short code is empty or contains characters outside Base62"""

    def __init__(self, alias: str):
        super().__init__(f"Invalid short code format: {alias!r}")
        self.alias = alias


class DuplicateAliasError(ShortenerError):
    """A record with this alias is already stored"""

    def __init__(self, alias: str):
        super().__init__(f"Alias already exists: {alias}")
        self.alias = alias


class RecordNotFoundError(ShortenerError, LookupError):
    """Update targeted an alias the store does not hold"""

    def __init__(self, alias: str):
        super().__init__(f"No record for alias: {alias}")
        self.alias = alias


class InvalidStatusTransitionError(ShortenerError):
    """Status change that would leave a terminal state"""

    def __init__(self, current, target):
        super().__init__(f"Cannot move status from {current.value} to {target.value}")
        self.current = current
        self.target = target


class HashBackendUnavailableError(ShortenerError, RuntimeError):
    """Configured digest algorithm is not available in this interpreter"""
