class OrderServiceError(Exception):
    """Base error of the order handlers, rendered as ``{success: false, message}``."""

    status_code = 500

    def __init__(self, message: str, error=None):
        super().__init__(message)
        self.message = message
        self.error = error

    def to_dict(self) -> dict:
        body = {"success": False, "message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class EmptyCartError(OrderServiceError):
    status_code = 400

    def __init__(self):
        super().__init__("Cart is empty. Add items before proceeding.")


class NotFoundError(OrderServiceError):
    status_code = 404


class ConflictError(OrderServiceError):
    status_code = 409


class PaymentProviderError(OrderServiceError):
    status_code = 500
