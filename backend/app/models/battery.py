import uuid
from datetime import date, datetime

from sqlalchemy import String, Float, Integer, Date, ForeignKey, DateTime, CheckConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.database import Base


class Battery(Base):
    __tablename__ = "batteries"
    __table_args__ = (
        CheckConstraint("charge_level >= 0 AND charge_level <= 100", name="ck_batteries_charge_level"),
        CheckConstraint("total_cycles >= 0", name="ck_batteries_total_cycles"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    battery_code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    serial_number: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default="available", index=True
    )  # available, charging, in_use, maintenance, retired, faulty (not enforced)
    charge_level: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    soh_percentage: Mapped[float] = mapped_column(Float, nullable=False, default=100.0)
    total_cycles: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    battery_type_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("battery_types.id"), nullable=False
    )
    station_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("stations.id", ondelete="SET NULL"), index=True
    )
    last_maintenance_date: Mapped[date | None] = mapped_column(Date)
    next_maintenance_date: Mapped[date | None] = mapped_column(Date)
    last_swap_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    battery_type: Mapped["BatteryType"] = relationship(  # noqa: F821
        back_populates="batteries", lazy="joined"
    )
    station: Mapped["Station"] = relationship(back_populates="batteries")  # noqa: F821
