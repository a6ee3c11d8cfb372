"""Exceptions raised by the contract testing toolkit"""


class ConfigurationError(RuntimeError):
    """Raised when a contract cannot be located, read or resolved.

    Configuration errors abort the calling operation. They are never turned
    into a failed validation verdict.
    """


class ContractAssertionError(AssertionError):
    """Raised by the test adapters when a response does not match its contract"""

    def __init__(self, message: str, verdict=None):
        super().__init__(message)
        self.verdict = verdict
