from .responses import (
    ok,
    error,
    validation_error_response,
)
from .validation import validate_schema, parse_bool
from .db import transactional

__all__ = [
    'ok',
    'error',
    'validation_error_response',
    'validate_schema',
    'parse_bool',
    'transactional',
]
