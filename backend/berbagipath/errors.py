from typing import Optional


class PaymentGatewayError(Exception):
    """Raised when a payment gateway rejects a request or cannot be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload
