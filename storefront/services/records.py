import logging
from typing import Any

from storefront.core.errors import ApiError, PersistenceUnavailable
from storefront.db.store import DocumentStore
from storefront.utils.dt import to_iso, utc_now

logger = logging.getLogger(__name__)

ORDER_STATUSES = ("pending", "completed", "cancelled")
INQUIRY_STATUSES = ("pending", "answered", "closed")

# No transition leaves these unless allow_any_status_transition is on
TERMINAL_STATUSES = ("completed", "cancelled", "closed")

INVALID_STATUS_MESSAGE = "حالة غير صالحة"
TERMINAL_STATUS_MESSAGE = "لا يمكن تغيير حالة طلب مكتمل أو ملغي"
NOT_FOUND_MESSAGE = "العنصر المطلوب غير موجود"


def require_store(store: DocumentStore | None) -> DocumentStore:
    if store is None:
        raise PersistenceUnavailable()
    return store


def create_record(store: DocumentStore | None, collection: str, record: dict[str, Any]) -> str:
    doc_id = require_store(store).add(collection, record)
    logger.info("Stored %s document %s", collection, doc_id)
    return doc_id


def list_records(store: DocumentStore | None, collection: str) -> list[dict[str, Any]]:
    # an unconfigured store degrades to an empty list on reads
    if store is None:
        logger.warning("Listing %s without a document store", collection)
        return []
    return store.list(collection)


def update_status(
    store: DocumentStore | None,
    collection: str,
    doc_id: str,
    status: str | None,
    allowed: tuple[str, ...],
    allow_any_transition: bool = True,
) -> dict[str, Any]:
    """
    Validate the new status before touching the store, so a rejected
    value never changes the stored record.
    """
    if status not in allowed:
        raise ApiError(400, INVALID_STATUS_MESSAGE)

    store = require_store(store)
    current = store.get(collection, doc_id)
    if current is None:
        raise ApiError(404, NOT_FOUND_MESSAGE)

    current_status = current.get("status")
    if not allow_any_transition and current_status in TERMINAL_STATUSES and status != current_status:
        raise ApiError(400, TERMINAL_STATUS_MESSAGE)

    fields = {"status": status, "updatedAt": to_iso(utc_now())}
    if not store.update(collection, doc_id, fields):
        # deleted in between
        raise ApiError(404, NOT_FOUND_MESSAGE)

    logger.info("%s %s status %s -> %s", collection, doc_id, current_status, status)
    return {**current, **fields}


def delete_record(store: DocumentStore | None, collection: str, doc_id: str) -> None:
    if not require_store(store).delete(collection, doc_id):
        raise ApiError(404, NOT_FOUND_MESSAGE)
    logger.info("Deleted %s document %s", collection, doc_id)
