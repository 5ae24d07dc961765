from .info import health_router
from .info import router as info_router
from .session import router as session_router
from .tools import router as tools_router

__all__ = ["health_router", "info_router", "session_router", "tools_router"]
