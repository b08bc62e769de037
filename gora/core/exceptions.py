__all__ = [
    "BaseError",
    "BadRequestError",
    "CollectionNotFoundError",
    "LoadError",
    "MalformedMappingError",
    "MappingNotFoundError",
    "NotFoundError",
    "NotSupportedError",
    "ServiceUnavailableError",
    "SpecError",
    "StoreUnavailableError",
]


class BaseError(Exception):
    status_code: int


class BadRequestError(BaseError):
    status_code = 400


class NotFoundError(BaseError):
    status_code = 404


class NotSupportedError(BaseError):
    status_code = 415


class ServiceUnavailableError(BaseError):
    status_code = 503


class MappingNotFoundError(NotFoundError):
    """Mapping file, or the requested class inside it, is absent."""


class MalformedMappingError(BadRequestError):
    """Mapping file is not well-formed or violates the mapping schema."""

    reason: str
    path: str | None
    source: str | None

    def __init__(
        self,
        reason: str,
        path: str | None = None,
        source: str | None = None,
    ):
        self.reason = reason
        self.path = path
        self.source = source
        message = reason
        if path:
            message = f"{message} (at {path})"
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class CollectionNotFoundError(NotFoundError):
    """Collection does not exist in the backend."""


class StoreUnavailableError(ServiceUnavailableError):
    """Backend cannot be reached."""


class LoadError(Exception):
    status_code = 500


class SpecError(Exception):
    status_code = 500
