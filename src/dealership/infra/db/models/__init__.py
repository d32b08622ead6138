from dealership.infra.db.models.base import Base
from dealership.infra.db.models.booking import BookingRow
from dealership.infra.db.models.car import CarRow
from dealership.infra.db.models.saved_car import SavedCarRow

__all__ = ["Base", "CarRow", "SavedCarRow", "BookingRow"]
