from functools import wraps
from flask import request
from app.exceptions import ValidationError


def validate_schema(schema):
    """Decorator to validate request JSON against a Pydantic schema.

    Validation failures propagate as ``pydantic.ValidationError`` and are
    rendered by the error blueprint.
    """

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            request.validated_data = schema.model_validate(request.get_json(silent=True) or {})
            return fn(*args, **kwargs)
        return wrapper

    return decorator


def query_int(name: str, default=None):
    """Read an integer query parameter, raising ValidationError when malformed."""
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer")


def query_bool(name: str, default=None):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    lowered = raw.lower()
    if lowered in ("1", "true", "yes"):
        return True
    if lowered in ("0", "false", "no"):
        return False
    raise ValidationError(f"{name} must be true or false")
