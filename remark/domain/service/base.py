"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the logic that spans repository calls, such as
    combining a page of comments with their grouped reply counts.
    """

    pass
