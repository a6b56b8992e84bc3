import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError

from storefront_admin.domain.coercion import to_datetime
from storefront_admin.domain.models import Document
from storefront_admin.infrastructure.database import SessionLocal
from storefront_admin.interfaces.IDocumentStore import IDocumentStore, DocumentStoreError

logger = logging.getLogger(__name__)

CREATED_AT = "createdAt"


class SqlDocumentStore(IDocumentStore):

    def __init__(self, session_factory=SessionLocal):
        self._session_factory = session_factory

    @contextmanager
    def _session(self, action: str):
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            logger.error(f"❌ DB Error during {action}: {e}")
            session.rollback()
            raise DocumentStoreError(f"{action} failed") from e
        finally:
            session.close()

    # --- READS ---

    def fetch_all(self, collection: str) -> List[Dict[str, Any]]:
        with self._session(f"fetch {collection}") as session:
            rows = session.query(Document).filter(Document.collection == collection).order_by(Document.pk).all()
            return [self._to_public(row) for row in rows]

    def fetch_where(self, collection: str, field: str, value: Any) -> List[Dict[str, Any]]:
        # Equality is checked on the decoded payload so non-string values compare like the client sent them
        return [doc for doc in self.fetch_all(collection) if doc.get(field) == value]

    def fetch_latest(self, collection: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Newest first by createdAt. Documents without a timestamp have nothing
        to order on and are left out, the same way an indexed query skips them.
        """
        with self._session(f"fetch latest {collection}") as session:
            query = (
                session.query(Document)
                .filter(Document.collection == collection, Document.created_at.isnot(None))
                .order_by(desc(Document.created_at), Document.pk)
            )
            if limit is not None:
                query = query.limit(limit)
            return [self._to_public(row) for row in query.all()]

    def fetch_by_id(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._session(f"fetch {collection}/{doc_id}") as session:
            row = self._get_row(session, collection, doc_id)
            return self._to_public(row) if row else None

    # --- WRITES ---

    def add(self, collection: str, data: Dict[str, Any], doc_id: Optional[str] = None) -> str:
        doc_id = doc_id or data.get("id") or uuid.uuid4().hex[:20]
        payload, created_at = self._split_payload(data)
        with self._session(f"add {collection}/{doc_id}") as session:
            session.add(Document(
                pk=f"{collection}/{doc_id}",
                collection=collection,
                doc_id=doc_id,
                data=payload,
                created_at=created_at,
            ))
            session.commit()
        return doc_id

    def update(self, collection: str, doc_id: str, changes: Dict[str, Any]) -> bool:
        with self._session(f"update {collection}/{doc_id}") as session:
            row = self._get_row(session, collection, doc_id)
            if row is None:
                return False
            payload, created_at = self._split_payload({**(row.data or {}), **changes})
            # Assign a new dict so the JSON column is flagged dirty
            row.data = payload
            if created_at is not None:
                row.created_at = created_at
            session.commit()
            return True

    def delete(self, collection: str, doc_id: str) -> bool:
        with self._session(f"delete {collection}/{doc_id}") as session:
            row = self._get_row(session, collection, doc_id)
            if row is None:
                return False
            session.delete(row)
            session.commit()
            return True

    # --- HELPERS ---

    @staticmethod
    def _get_row(session, collection: str, doc_id: str) -> Optional[Document]:
        return (
            session.query(Document)
            .filter(Document.collection == collection, Document.doc_id == doc_id)
            .first()
        )

    @staticmethod
    def _split_payload(data: Dict[str, Any]):
        """Lift a usable createdAt out of the payload; everything else stays as JSON."""
        payload = {k: v for k, v in data.items() if k != "id"}
        created_at = to_datetime(payload.get(CREATED_AT))
        if created_at is None:
            return payload, None
        payload.pop(CREATED_AT)
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return payload, created_at.astimezone(timezone.utc)

    @staticmethod
    def _to_public(row: Document) -> Dict[str, Any]:
        doc = dict(row.data or {})
        if row.created_at is not None:
            created_at: datetime = row.created_at
            # SQLite hands back naive values; they were stored as UTC
            if created_at.tzinfo is None:
                created_at = created_at.replace(tzinfo=timezone.utc)
            doc[CREATED_AT] = created_at
        doc["id"] = row.doc_id
        return doc
