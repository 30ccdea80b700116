"""Error taxonomy shared by the validators, the service and the store gateway."""


class ProductServiceError(Exception):
    """Base class; ``status_code`` is the HTTP status the error maps to."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ProductServiceError):
    """Client supplied data that fails a validation rule."""
    status_code = 400


class NotFoundError(ProductServiceError):
    """The target product does not exist."""
    status_code = 404

    def __init__(self, message: str = "Product not found"):
        super().__init__(message)


class StoreError(ProductServiceError):
    """Any failure coming from the data layer. The message is passed through as-is."""
    status_code = 500
