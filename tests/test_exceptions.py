from django.db import DatabaseError, IntegrityError

from orders.exceptions import (
    FOREIGN_KEY_VIOLATION, INSUFFICIENT_PRIVILEGE, NOT_NULL_VIOLATION,
    OrderPersistenceError, database_error_code
)


class DriverError(Exception):
    def __init__(self, pgcode):
        super().__init__('driver error')
        self.pgcode = pgcode


def wrapped(pgcode):
    exc = IntegrityError('constraint violated')
    exc.__cause__ = DriverError(pgcode)
    return exc


def test_code_from_driver_error():
    assert database_error_code(wrapped('23503')) == FOREIGN_KEY_VIOLATION


def test_code_from_sqlite_messages():
    assert database_error_code(IntegrityError('NOT NULL constraint failed: x.y')) == NOT_NULL_VIOLATION
    assert database_error_code(DatabaseError('attempt to write a readonly database')) == INSUFFICIENT_PRIVILEGE
    assert database_error_code(DatabaseError('disk I/O error')) is None


def test_messages_per_code():
    assert str(OrderPersistenceError.from_database_error(wrapped('23502')).detail) == \
        'Required data not provided for the order'
    assert str(OrderPersistenceError.from_database_error(wrapped('23503')).detail) == \
        'Invalid reference in order data'
    assert str(OrderPersistenceError.from_database_error(wrapped('42501')).detail) == \
        'Permission denied to save the order'


def test_other_errors_keep_driver_message():
    error = OrderPersistenceError.from_database_error(DatabaseError('disk I/O error'))

    assert str(error.detail) == 'Database error: disk I/O error'
    assert error.status_code == 500
