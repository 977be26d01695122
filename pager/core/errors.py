"""Error types produced by the pagination controllers."""


class FetchFailure(Exception):
    """Opaque failure of a fetcher call.

    Carries a human-readable message and, optionally, the exception that
    caused it. Controllers never classify causes; they only store the failure
    in their status.
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    @classmethod
    def from_exception(cls, exc: BaseException) -> "FetchFailure":
        """Wrap an arbitrary exception, passing existing failures through."""
        if isinstance(exc, FetchFailure):
            return exc
        return cls(str(exc) or type(exc).__name__, cause=exc)

    def __repr__(self) -> str:
        return f"FetchFailure({self.message!r})"
