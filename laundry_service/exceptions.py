"""
Order subsystem errors

Each error carries the HTTP status the API layer renders it with.
"""


class OrderServiceError(Exception):
    """Base class for every error surfaced to API callers"""
    status_code = 500
    
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(OrderServiceError):
    """Malformed or missing input"""
    status_code = 400


class NotFound(OrderServiceError):
    """Unknown order"""
    status_code = 404
    
    def __init__(self, order_id: int):
        super().__init__("Order not found")
        self.order_id = order_id


class InvalidStatus(OrderServiceError):
    """Transition target is not a recognized status"""
    status_code = 400
    
    def __init__(self, status):
        super().__init__("Invalid status")
        self.status = status


class InvalidOperation(OrderServiceError):
    """Operation not allowed in the order's current state"""
    status_code = 400


class RepositoryError(OrderServiceError):
    """Infrastructure failure in the backing store"""
    status_code = 500
