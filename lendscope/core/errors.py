"""Exception types for LendScope."""


class ComputationError(ValueError):
    """Numeric input that cannot be used in a rate or risk computation."""


class FetchFailure(RuntimeError):
    """Market data could not be fetched for a key."""

    def __init__(self, message: str, key=None):
        super().__init__(message)
        self.key = key
