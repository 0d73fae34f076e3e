"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class UpstreamUnavailableError(AdapterError):
    """The external store or subscription channel failed or timed out."""

    pass


class PayloadTranslationError(AdapterError):
    """A change payload from the store could not be mapped to a domain event."""

    pass
