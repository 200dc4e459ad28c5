"""Base service class for domain services."""


class Service:
    """Base class for domain services.

    Services hold business rules that span a repository call, such as the
    author check before an edit, and are REQUEST-scoped in the container.
    """

    pass
