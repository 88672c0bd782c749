from contextlib import contextmanager
import logging
from sqlalchemy.exc import SQLAlchemyError
from models import db
from app.exceptions import UpstreamError


@contextmanager
def transactional(message="DB transaction failed"):
    """Commit the session on success, roll back and re-raise on failure.

    Store failures surface as ``UpstreamError`` carrying ``message`` rather
    than the driver's text.
    """
    try:
        yield
        db.session.commit()
    except SQLAlchemyError as e:
        logging.error(f"{message}: %s", e, exc_info=True)
        db.session.rollback()
        raise UpstreamError(message) from e
    except Exception:
        db.session.rollback()
        raise
