# Import all models so SQLAlchemy can resolve relationships
from app.models.database import Base  # noqa: F401
from app.models.station import Station  # noqa: F401
from app.models.battery_type import BatteryType  # noqa: F401
from app.models.battery import Battery  # noqa: F401
