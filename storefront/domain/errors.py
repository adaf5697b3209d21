# storefront/domain/errors.py


class StorefrontError(Exception):
    """Bazowy blad domeny, router mapuje go na {success: false, error}."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(StorefrontError):
    status_code = 400


class NotFoundError(StorefrontError):
    status_code = 404


class ConsistencyError(StorefrontError):
    status_code = 409


class InfrastructureError(StorefrontError):
    status_code = 503
