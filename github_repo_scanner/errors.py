"""Exceptions raised while talking to GitHub."""


class FetchError(Exception):
    """A remote call failed (network, auth, or malformed response).

    The underlying exception is chained as ``__cause__``.
    """


class PartialResultError(FetchError):
    """A listing was interrupted by a fetch failure.

    ``results`` holds everything collected before the failure. Callers may
    keep it, but the listing is incomplete.
    """

    def __init__(self, message: str, results: list):
        super().__init__(message)
        self.results = results
