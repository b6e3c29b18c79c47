"""
Typed failures raised by the inventory core.

Each failure carries a stable ``kind`` so callers can tell them apart
without parsing messages. Mapping kinds to HTTP status codes is done in
``stockroom.utils.error_handlers``.
"""


class InventoryError(Exception):
    """Base class for inventory failures"""
    kind = 'inventory_error'

    def __init__(self, message):
        self.message = message
        super().__init__(self.message)


class NotFoundError(InventoryError):
    """Unknown product, request or user reference"""
    kind = 'not_found'


class InvalidArgumentError(InventoryError):
    """Non-positive quantity, missing required field, duplicate SKU"""
    kind = 'invalid_argument'


class InvalidStateError(InventoryError):
    """Operation not allowed in the record's current lifecycle state"""
    kind = 'invalid_state'


class ForbiddenError(InventoryError):
    """Actor is not allowed to perform the operation"""
    kind = 'forbidden'


class InsufficientStockError(InventoryError):
    """Requested quantity exceeds what is available"""
    kind = 'insufficient_stock'

    def __init__(self, available, requested, message=None):
        self.available = available
        self.requested = requested
        super().__init__(
            message or f"Insufficient inventory. Available: {available}, Requested: {requested}"
        )
