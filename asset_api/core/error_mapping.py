"""
Translation of ledger failures into HTTP errors.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from asset_api.core.exceptions import (
    AssetAPIException,
    AssetNotFoundException,
    ForbiddenException,
    LedgerOperationException,
)
from asset_api.ledger.errors import AccessDeniedError, RecordNotFoundError

logger = logging.getLogger(__name__)


def map_ledger_error(
    error: Exception,
    context: str,
    *,
    not_found: bool = True,
    access_denied: bool = True,
) -> AssetAPIException:
    """
    Choose the HTTP error for a failed ledger call.

    Args:
        error: The failure raised while handling the request
        context: Message used for generic failures (e.g., "Failed to create asset")
        not_found: Whether this route answers a missing record with 404
        access_denied: Whether this route answers a refused identity with 403

    Returns:
        The exception to raise to the client
    """
    if not_found and isinstance(error, RecordNotFoundError):
        return AssetNotFoundException()
    if access_denied and isinstance(error, AccessDeniedError):
        return ForbiddenException()
    return LedgerOperationException(context, details=str(error))


@contextmanager
def translate_ledger_errors(
    context: str,
    *,
    not_found: bool = True,
    access_denied: bool = True,
) -> Iterator[None]:
    """
    Wrap a route body so any failure surfaces as an API exception.

    API exceptions raised inside the block pass through unchanged.

    Usage:
        with translate_ledger_errors("Failed to delete asset", access_denied=False):
            async with provisioner.session("admin") as session:
                ...
    """
    try:
        yield
    except AssetAPIException:
        raise
    except Exception as e:
        logger.error(f"{context}: {e}")
        raise map_ledger_error(
            e,
            context,
            not_found=not_found,
            access_denied=access_denied,
        ) from e
