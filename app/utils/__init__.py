from .responses import ok, error, validation_error_response, internal_error_response
from .auth import (
    AuthenticatedRequest,
    auth_required,
    permission_required,
    role_required,
    bearer_token,
)
from .validation import validate_schema, query_int, query_bool
from .db import transactional
from .jwt import (
    create_access_token,
    create_refresh_token,
    decode_token,
    TokenError,
)
from .text import fold, folded_contains

__all__ = [
    'ok',
    'error',
    'validation_error_response',
    'internal_error_response',
    'AuthenticatedRequest',
    'auth_required',
    'permission_required',
    'role_required',
    'bearer_token',
    'create_access_token',
    'create_refresh_token',
    'decode_token',
    'TokenError',
    'validate_schema',
    'query_int',
    'query_bool',
    'transactional',
    'fold',
    'folded_contains',
]
