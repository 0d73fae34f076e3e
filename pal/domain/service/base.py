"""Domain service base."""


class Service:
    """Business rules acting on behalf of one session user."""

    pass
