"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    Domain services hold logic that spans aggregates or needs a repository.
    """

    pass
