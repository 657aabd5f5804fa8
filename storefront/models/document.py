from datetime import datetime

from sqlalchemy import JSON, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base


class Document(Base):
    __tablename__ = "documents"

    # uuid4 hex assigned by the store
    id: Mapped[str] = mapped_column(String(32), primary_key=True)

    # One of: "orders", "suggestions", "inquiries"
    collection: Mapped[str] = mapped_column(String(64), index=True)

    # The record itself; createdAt/updatedAt are kept inside as ISO strings too
    data: Mapped[dict] = mapped_column(JSON)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_documents_collection_created", "collection", "created_at"),
    )
