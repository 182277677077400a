from .orders import router as orders_router
from .weighing import router as weighing_router
from .charging import router as charging_router
from .alarms import router as alarms_router

__all__ = ["orders_router", "weighing_router", "charging_router", "alarms_router"]
