from sqlalchemy import Column, String, DateTime, JSON, UniqueConstraint
from storefront_admin.infrastructure.database import Base

class Document(Base):
    __tablename__ = "documents"
    __table_args__ = (UniqueConstraint("collection", "doc_id", name="uq_documents_collection_doc_id"),)

    # Surrogate key; the public identifier is doc_id, unique within a collection
    pk = Column(String(140), primary_key=True)
    collection = Column(String(64), index=True, nullable=False)
    doc_id = Column(String(64), index=True, nullable=False)

    # Schemaless payload. Legacy orders may carry totalAmount, total or totalPrice.
    data = Column(JSON, nullable=False, default=dict)

    # Lifted out of the payload so the store can order on it
    created_at = Column(DateTime(timezone=True), index=True, nullable=True)
