"""SQLAlchemy ORM model for the DunaRecord entity."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, Integer, JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from duna_service.infrastructure.database.base import Base


class DunaRecordModel(Base):
    """ORM model — maps to the 'duna_records' table."""

    __tablename__ = "duna_records"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    membership_status: Mapped[str] = mapped_column(String(50), nullable=False, default="pending")
    compliance_level: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    parameters: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    contract_generated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    contract_source: Mapped[str] = mapped_column(Text, nullable=False, default="")
    contract_address: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_duna_records_created_at", "created_at"),
        Index("ix_duna_records_contract_generated", "contract_generated"),
    )

    def __repr__(self) -> str:
        return (
            f"<DunaRecordModel(id={self.id}, name='{self.name}', "
            f"contract_generated={self.contract_generated})>"
        )
