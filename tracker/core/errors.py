"""
Error taxonomy.

Every error carries the HTTP status and the public message it maps to;
tracker.main registers one handler that renders them all.
"""

from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

import structlog

logger = structlog.get_logger()


class TrackerError(Exception):
    status_code = 500
    message = "Internal server error."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidRequest(TrackerError):
    """Missing or malformed input. Raised before the store is touched."""
    status_code = 400
    message = "Missing required parameters."


class DuplicateClick(TrackerError):
    status_code = 409
    message = "Duplicate click ID."


class UnknownClick(TrackerError):
    """Same response whether the click_id is unknown or owned by another affiliate."""
    status_code = 404
    message = "Invalid click_id for affiliate_id. Postback ignored."


class StoreError(TrackerError):
    status_code = 500
    message = "Internal server error."


@contextmanager
def store_errors(operation: str, message: str | None = None):
    """Turn driver/connection failures into StoreError, logging the detail."""
    try:
        yield
    except TrackerError:
        raise
    except (SQLAlchemyError, OSError) as e:
        logger.error("store_error", operation=operation, error=str(e), exc_info=True)
        raise StoreError(message) from e
