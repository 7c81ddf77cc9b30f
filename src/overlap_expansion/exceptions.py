"""
Custom exceptions for overlap-based expansion.
"""

class OverlapExpansionException(Exception):
    """Base exception for the package."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

class NoSeedsError(OverlapExpansionException, ValueError):
    """Raised when an expansion is constructed without any seed nodes."""
    pass

class InvalidStrategyConfigError(OverlapExpansionException, ValueError):
    """Raised when a strategy is given an out-of-range parameter."""
    pass

class UnknownVariantError(OverlapExpansionException, KeyError):
    """Raised when a variant id is not present in the registry."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message

class ExpansionAlreadyRunError(OverlapExpansionException, RuntimeError):
    """Raised when run() is called a second time on the same expansion."""
    pass
