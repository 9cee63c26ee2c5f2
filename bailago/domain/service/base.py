"""Base service class for domain services."""


class Service:
    """Base class for all domain registries.

    Registries own the business rules for one aggregate. They read and write
    through injected repositories and report expected failures as
    ``Outcome`` values.
    """

    pass
