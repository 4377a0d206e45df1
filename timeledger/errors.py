"""Error taxonomy.

Only ``IdentityNotFound`` (and its ``AppNotFound`` subclass) ever reach
callers. ``SourceUnavailable`` and ``InvalidInput`` are raised inside the
source adapters and recovered there.
"""


class TimeLedgerError(Exception):
    """Base class for timeledger errors."""


class SourceUnavailable(TimeLedgerError):
    """A span or checkpoint source failed or timed out."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source} unavailable: {reason}")


class InvalidInput(TimeLedgerError):
    """A single span or checkpoint record could not be decoded."""


class IdentityNotFound(TimeLedgerError):
    """The identity (or app) does not exist in the record store."""

    def __init__(self, identity: str | None, message: str | None = None):
        self.identity = identity
        super().__init__(message or f"Contributor '{identity}' not found")


class AppNotFound(IdentityNotFound):
    def __init__(self, app_name: str, identity: str | None = None):
        self.app_name = app_name
        message = f"App '{app_name}' not found"
        if identity:
            message += f" for contributor '{identity}'"
        super().__init__(identity, message)
