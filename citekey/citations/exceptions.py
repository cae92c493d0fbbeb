"""Exception classes for citation key generation."""


class KeyGenerationError(Exception):
    """Base exception for key generation failures."""

    pass


class InvalidModifierError(KeyGenerationError, ValueError):
    """Raised when a modifier carries a malformed argument."""

    def __init__(self, modifier: str, message: str):
        """Initialize with the offending modifier token."""
        self.modifier = modifier
        super().__init__(f"Invalid modifier '{modifier}': {message}")


class EmptyKeyError(KeyGenerationError, ValueError):
    """Raised when a pattern expands to an empty key."""

    def __init__(self, pattern: str):
        """Initialize with the pattern that produced nothing."""
        self.pattern = pattern
        super().__init__(f"Pattern '{pattern}' produced an empty citation key")


class UniquenessExhaustedError(KeyGenerationError, RuntimeError):
    """Raised when no unique suffix is found within the attempt limit."""

    def __init__(self, key: str, attempts: int):
        """Initialize with the base key and number of attempts."""
        self.key = key
        self.attempts = attempts
        super().__init__(
            f"Cannot find unique key for '{key}' after {attempts} attempts"
        )
