"""
Error taxonomy for OMDb requests.

Every error carries a short machine-readable ``code`` so routes and
orchestrators can report failures without inspecting exception types.

An empty search ("Movie not found!") is deliberately NOT an error here:
it is a well-formed answer and surfaces as ``SearchStatus.NO_RESULTS``.
"""


class OmdbError(Exception):
    """Base class for all OMDb request failures."""

    code = "omdb_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(OmdbError):
    """Network failure or non-2xx HTTP status."""

    code = "transport_error"

    def __init__(self, message: str, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(OmdbError):
    """Response body is not the JSON shape we expect."""

    code = "parse_error"


class ApiLogicalError(OmdbError):
    """Well-formed response whose ``Error`` field reports a failure."""

    code = "api_error"


class OmdbConfigError(OmdbError):
    """OMDb API key is missing."""

    code = "config_error"


def error_code(exc: BaseException) -> str:
    """Return the failure code for any exception raised below an orchestrator."""
    if isinstance(exc, OmdbError):
        return exc.code
    return "unexpected_error"
