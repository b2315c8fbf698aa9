from .health import router as health_router
from .payments import router as payments_router

__all__ = [
    "health_router",
    "payments_router",
]
