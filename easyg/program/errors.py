"""Compile/persist error taxonomy."""


class ProgramError(Exception):
    """Base class for program compile and storage failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(ProgramError):
    """Device identifier missing or answers absent, not a list, or empty."""


class OracleUnavailable(ProgramError):
    """Pattern oracle not configured, not loadable, or raised during a call."""


class StoreFailure(ProgramError):
    """Program store rejected a read or write."""
