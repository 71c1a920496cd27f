from rest_framework import status
from rest_framework.exceptions import APIException

# SQLSTATE codes reported by PostgreSQL drivers
NOT_NULL_VIOLATION = '23502'
FOREIGN_KEY_VIOLATION = '23503'
INSUFFICIENT_PRIVILEGE = '42501'


def database_error_code(exc):
    """SQLSTATE of a Django DatabaseError, falling back to SQLite messages."""
    cause = exc.__cause__
    code = getattr(cause, 'pgcode', None) or getattr(cause, 'sqlstate', None)
    if code:
        return code

    message = str(exc)
    if 'NOT NULL constraint failed' in message:
        return NOT_NULL_VIOLATION
    if 'FOREIGN KEY constraint failed' in message:
        return FOREIGN_KEY_VIOLATION
    if 'attempt to write a readonly database' in message:
        return INSUFFICIENT_PRIVILEGE
    return None


class OrderPersistenceError(APIException):
    """The kitchen order could not be saved; the checkout was aborted."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Could not save the order.'
    default_code = 'order_not_saved'

    MESSAGES = {
        NOT_NULL_VIOLATION: ('Required data not provided for the order', 'required_data_missing'),
        FOREIGN_KEY_VIOLATION: ('Invalid reference in order data', 'invalid_reference'),
        INSUFFICIENT_PRIVILEGE: ('Permission denied to save the order', 'permission_denied'),
    }

    @classmethod
    def from_database_error(cls, exc):
        code = database_error_code(exc)
        if code in cls.MESSAGES:
            message, error_code = cls.MESSAGES[code]
            return cls(detail=message, code=error_code)
        return cls(detail=f'Database error: {exc}', code='database_error')


class CheckoutInProgress(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Your order is already being processed. Please wait.'
    default_code = 'checkout_in_progress'


class InvalidStatusTransition(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'This status change is not allowed.'
    default_code = 'invalid_status_transition'
