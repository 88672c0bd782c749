from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import BigInteger, Integer

# Use BigInteger in production but fall back to Integer for SQLite
BIGINT = BigInteger().with_variant(Integer, "sqlite")

db = SQLAlchemy()

# Re-export common models for convenience
from .item import Category, Item  # noqa: F401,E402
from .order import Order, OrderItem  # noqa: F401,E402
from .user import User, Credential, RevokedToken  # noqa: F401,E402
from .access_request import AccessRequest  # noqa: E402,F401
