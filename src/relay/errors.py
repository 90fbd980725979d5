"""Relay error taxonomy.

Each error carries the HTTP status and the JSON payload the API layer
renders for it.
"""


class RelayError(Exception):
    """Base class for failures reported to the caller as ``{error, details}``."""

    status_code: int = 500

    def __init__(
        self,
        error: str,
        details: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(error)
        self.error = error
        self.details = details
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(RelayError):
    """Raised when the upstream credential is not configured."""

    status_code = 500


class InvalidRequestError(RelayError):
    """Raised for malformed JSON bodies or a missing question."""

    status_code = 400


class UpstreamError(RelayError):
    """Raised when the upstream API answers with a non-success status.

    The upstream status code is passed through to the caller.
    """


class EmptyAnswerError(RelayError):
    """Raised when the upstream call succeeds but yields no usable text."""

    status_code = 502


class UpstreamUnavailableError(RelayError):
    """Raised when the upstream API cannot be reached."""

    status_code = 502
