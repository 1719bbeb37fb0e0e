"""Error kinds raised by the services.

The HTTP layer turns each of them into a JSON body and a status code;
see the exception handlers in ``catalog_api.main``.
"""


class CatalogError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """Required fields are missing or empty."""

    status_code = 400


class AuthError(CatalogError):
    """Bad credentials, or a missing, invalid or expired token."""

    status_code = 401


class NotFoundError(CatalogError):
    status_code = 404


class ConflictError(CatalogError):
    """The username is already taken."""

    status_code = 409


class StoreError(CatalogError):
    """The database rejected or failed an operation."""

    status_code = 500
