from fastapi import HTTPException, Request, status

from ..app import ChatFacade


async def get_facade(request: Request) -> ChatFacade:
    facade = getattr(request.app.state, "facade", None)
    if facade is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Chat session is not initialized",
        )
    return facade
