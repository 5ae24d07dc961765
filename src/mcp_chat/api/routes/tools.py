from fastapi import APIRouter, Depends, HTTPException, status

from ...app import ChatFacade
from ..dependencies import get_facade
from ..schemas import ToolsResponse

router = APIRouter()


@router.get("", response_model=ToolsResponse, summary="List tools advertised by the MCP server")
async def list_tools(facade: ChatFacade = Depends(get_facade)):
    result = await facade.list_tools()
    if result.is_failure:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error listing tools: {result.error}",
        )
    return {"tools": result.value, "count": len(result.value)}
