from contextlib import contextmanager
import logging
from sqlalchemy.exc import SQLAlchemyError
from models import db


@contextmanager
def transactional(message="DB transaction failed"):
    """Context manager to wrap a database transaction.

    Database failures come back as ``BackendError`` carrying ``message`` and
    the driver's text. Tables touched by the transaction are announced on
    the change feed once the commit has gone through.
    """
    from app.services.backend import change_feed, BackendError

    try:
        yield
        db.session.commit()
    except SQLAlchemyError as e:
        logging.error(f"{message}: %s", e, exc_info=True)
        db.session.rollback()
        raise BackendError(f"{message}: {e}") from e
    except Exception as e:
        logging.error(f"{message}: %s", e, exc_info=True)
        db.session.rollback()
        raise
    change_feed.publish_pending(db.session)
