from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status

from ...app import ChatFacade
from ..dependencies import get_facade

router = APIRouter()
health_router = APIRouter()


@router.get(
    "/",
    status_code=status.HTTP_200_OK,
    summary="Get system information"
)
async def get_info(request: Request, facade: ChatFacade = Depends(get_facade)) -> Dict[str, Any]:
    settings = request.app.state.settings
    session = facade.current_session()
    return {
        "engine_type": settings.engine_type,
        "llm_model": settings.claude_model,
        "max_tokens": settings.max_tokens,
        "mcp_server_url": settings.mcp_server_url,
        "session_id": session.session_id,
        "is_connected": session.is_connected,
        "tools_count": len(session.available_tools),
    }


@health_router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Health check endpoint"
)
async def health_check() -> Dict[str, str]:
    return {"status": "healthy"}
