"""Configuration, lookup and infrastructure exceptions for resmap-core."""

from __future__ import annotations


class ResmapError(Exception):
    """Root exception for the entire resmap toolkit."""


class ConfigurationError(ResmapError):
    """Base class for errors caused by how a resource or driver was declared."""


class MissingModelNameError(ConfigurationError):
    """Raised when a resource is described before a model name was declared."""

    def __init__(self, resource: type) -> None:
        self.resource = resource
        super().__init__(
            f"Name is missing for {resource.__name__}. "
            "Did you declare a model name for this class?"
        )


class InvalidPrimaryKeyError(ConfigurationError):
    """Raised when a backend cannot use the primary column of a resource."""

    def __init__(self, message: str = "Invalid primary key. It has to be of type Number") -> None:
        super().__init__(message)


class InvalidColumnError(ConfigurationError):
    """Raised when a column declaration is inconsistent (e.g. default of wrong type)."""

    def __init__(self, resource: str, column: str, reason: str) -> None:
        self.resource = resource
        self.column = column
        self.reason = reason
        super().__init__(f"Invalid column {resource}.{column}: {reason}")


class DriverNotConfiguredError(ConfigurationError):
    """Raised when a persistence operation runs before ``Resource.use(driver)``."""

    def __init__(self) -> None:
        super().__init__(
            "No resource driver installed. Call Resource.use(driver) "
            "or pass driver= explicitly."
        )


class NotFoundError(ResmapError):
    """Raised when a stored record cannot be found."""


class ResourceNotFoundError(NotFoundError):
    """Raised when a record of a resource cannot be found by primary key."""

    def __init__(self, resource: str, key: object) -> None:
        self.resource = resource
        self.key = key
        super().__init__(f"Not found: {resource} with key={key!r}")


class InfrastructureError(ResmapError):
    """Base class for all infrastructure-related errors."""


class PersistenceError(InfrastructureError):
    """Raised when a backend fails to provision, store, load or remove data."""


class SerializationError(PersistenceError):
    """Raised when a value cannot be converted to or from its stored form."""
