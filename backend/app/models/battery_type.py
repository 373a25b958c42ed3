import uuid

from sqlalchemy import String, Float
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.database import Base


class BatteryType(Base):
    __tablename__ = "battery_types"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    type_code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    type_name: Mapped[str] = mapped_column(String(255), nullable=False)
    manufacturer: Mapped[str] = mapped_column(String(255), nullable=False)
    capacity_kwh: Mapped[float] = mapped_column(Float, nullable=False)

    batteries: Mapped[list["Battery"]] = relationship(back_populates="battery_type")  # noqa: F821
