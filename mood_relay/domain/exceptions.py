from __future__ import annotations


class AnalyzeRequestError(Exception):
    """Raised when an analyze request cannot be handled at all.

    Per-provider failures never raise this; they are reported inside the
    aggregated response instead.
    """

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingTextError(AnalyzeRequestError):
    """Raised when the request carries no text to analyse."""

    status_code = 400

    def __init__(self, message: str = "Missing text"):
        super().__init__(message)


class MalformedRequestError(AnalyzeRequestError):
    """Raised when the request body is not a usable JSON object."""
