"""Category ORM — a catalog grouping shown on the storefront with its own image.

Invariants:
    - id is UUID primary key (client-side default)
    - name and code are each globally unique (named constraints, see UNIQUE_FIELDS)
    - image_url is the canonical URL returned by the image store, never client input

Design Decisions:
    - Named unique constraints: handlers map an IntegrityError back to the
      colliding field without parsing driver-specific messages
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from storefront.db.base import Base


class Category(Base):
    """Category entity — administrators create these from the dashboard."""
    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("name", name="uq_categories_name"),
        UniqueConstraint("code", name="uq_categories_code"),
    )

    UNIQUE_FIELDS = ("name", "code")

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    code: Mapped[str] = mapped_column(String(50), nullable=False)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    products: Mapped[list["Product"]] = relationship(
        "Product", back_populates="category", lazy="noload",
    )
