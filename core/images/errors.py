"""Exception classes for the image search hub."""


class ImageError(Exception):
    """Base image service exception."""

    def __init__(self, message: str, provider: str | None = None):
        self.message = message
        self.provider = provider
        super().__init__(message)


class ValidationError(ImageError):
    """Invalid search input. Raised before any provider is called."""

    pass


class ConfigurationError(ImageError):
    """Missing or rejected provider credential."""

    pass


class RateLimitError(ImageError):
    """API rate limit exceeded."""

    pass


class InvalidResponseError(ImageError):
    """Provider returned a payload that does not match its schema."""

    pass


class ProviderError(ImageError):
    """Provider-specific error."""

    pass


class AggregateError(ImageError):
    """Failure in the aggregation layer itself, not in a single provider."""

    pass
