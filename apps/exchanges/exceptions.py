"""
Exchange domain errors.

Each error carries a stable ``code`` the API reports next to the
human-readable message.
"""


class ExchangeError(Exception):
    """Base class for failures that abort an exchange or a status change"""
    code = 'INTERNAL'
    default_message = 'Exchange failed'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ExchangeNotFound(ExchangeError):
    code = 'NOT_FOUND'
    default_message = 'Product not found'


class ProductUnavailable(ExchangeError):
    code = 'UNAVAILABLE'
    default_message = 'Product is not available'


class InsufficientStock(ExchangeError):
    code = 'INSUFFICIENT_STOCK'
    default_message = 'Insufficient stock'


class InsufficientPoints(ExchangeError):
    code = 'INSUFFICIENT_POINTS'
    default_message = 'Insufficient points'


class ExchangeValidationError(ExchangeError):
    code = 'VALIDATION'
    default_message = 'Invalid input'


class InvalidStatusTransition(ExchangeError):
    code = 'INVALID_TRANSITION'
    default_message = 'Status transition not allowed'


class ExchangeInternalError(ExchangeError):
    code = 'INTERNAL'
    default_message = 'Exchange could not be completed'
