"""
Document store port.

Handlers only talk to a DocumentStore: add/get/list/update/delete per
collection, records as plain dicts carrying their store-assigned "id".
SqlDocumentStore keeps every collection in one JSON table;
MemoryDocumentStore is used by the tests and by database_url="memory://".
"""
import copy
import itertools
import logging
import threading
from typing import Any, Protocol
from uuid import uuid4

from sqlalchemy import select

from storefront.core.config import Settings
from storefront.db.base import Base
from storefront.db.session import build_engine, build_session_factory
from storefront.models.document import Document
from storefront.utils.dt import parse_iso, utc_now

logger = logging.getLogger(__name__)

ORDERS = "orders"
SUGGESTIONS = "suggestions"
INQUIRIES = "inquiries"

MEMORY_URL = "memory://"


class DocumentStore(Protocol):
    def add(self, collection: str, data: dict[str, Any]) -> str: ...

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None: ...

    def list(self, collection: str) -> list[dict[str, Any]]: ...

    def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> bool: ...

    def delete(self, collection: str, doc_id: str) -> bool: ...


def _new_id() -> str:
    return uuid4().hex


class MemoryDocumentStore:
    def __init__(self):
        self._docs: dict[str, dict[str, tuple[int, dict[str, Any]]]] = {}
        self._seq = itertools.count()
        self._lock = threading.Lock()

    def add(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = _new_id()
        with self._lock:
            self._docs.setdefault(collection, {})[doc_id] = (next(self._seq), copy.deepcopy(data))
        return doc_id

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        with self._lock:
            entry = self._docs.get(collection, {}).get(doc_id)
            if entry is None:
                return None
            return {"id": doc_id, **copy.deepcopy(entry[1])}

    def list(self, collection: str) -> list[dict[str, Any]]:
        with self._lock:
            items = list(self._docs.get(collection, {}).items())
        # newest first; insertion order breaks ties inside one millisecond
        items.sort(key=lambda kv: (kv[1][1].get("createdAt") or "", kv[1][0]), reverse=True)
        return [{"id": doc_id, **copy.deepcopy(data)} for doc_id, (_, data) in items]

    def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> bool:
        with self._lock:
            entry = self._docs.get(collection, {}).get(doc_id)
            if entry is None:
                return False
            entry[1].update(copy.deepcopy(fields))
            return True

    def delete(self, collection: str, doc_id: str) -> bool:
        with self._lock:
            return self._docs.get(collection, {}).pop(doc_id, None) is not None


class SqlDocumentStore:
    def __init__(self, settings: Settings):
        self.engine = build_engine(settings)
        self.SessionLocal = build_session_factory(self.engine)

    def create_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    def add(self, collection: str, data: dict[str, Any]) -> str:
        doc = Document(
            id=_new_id(),
            collection=collection,
            data=dict(data),
            created_at=parse_iso(data.get("createdAt")) or utc_now(),
        )
        with self.SessionLocal() as db:
            db.add(doc)
            db.commit()
            return doc.id

    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        with self.SessionLocal() as db:
            doc = db.get(Document, doc_id)
            if not doc or doc.collection != collection:
                return None
            return {"id": doc.id, **doc.data}

    def list(self, collection: str) -> list[dict[str, Any]]:
        stmt = (
            select(Document)
            .where(Document.collection == collection)
            .order_by(Document.created_at.desc())
        )
        with self.SessionLocal() as db:
            return [{"id": doc.id, **doc.data} for doc in db.scalars(stmt)]

    def update(self, collection: str, doc_id: str, fields: dict[str, Any]) -> bool:
        with self.SessionLocal() as db:
            doc = db.get(Document, doc_id)
            if not doc or doc.collection != collection:
                return False
            # reassign so the JSON column is flagged dirty
            doc.data = {**doc.data, **fields}
            doc.updated_at = parse_iso(fields.get("updatedAt")) or utc_now()
            db.commit()
            return True

    def delete(self, collection: str, doc_id: str) -> bool:
        with self.SessionLocal() as db:
            doc = db.get(Document, doc_id)
            if not doc or doc.collection != collection:
                return False
            db.delete(doc)
            db.commit()
            return True


def build_store(settings: Settings) -> DocumentStore | None:
    if not settings.database_url:
        logger.warning("DATABASE_URL is empty; reads return nothing and writes fail")
        return None
    if settings.database_url == MEMORY_URL:
        logger.warning("Using the in-memory document store; data is lost on restart")
        return MemoryDocumentStore()

    store = SqlDocumentStore(settings)
    store.create_schema()
    return store
