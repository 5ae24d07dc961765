import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status

from ...app import ChatFacade
from ...exceptions import InvalidInputError, ProviderError, ServerConnectionError
from ..dependencies import get_facade
from ..schemas import MessageResponse, SendMessageInput, SessionResponse, StatusResponse

router = APIRouter()
logger = logging.getLogger("SessionRoutes")


def _status_for(error: Exception) -> int:
    if isinstance(error, InvalidInputError):
        return 422
    if isinstance(error, (ProviderError, ServerConnectionError)):
        return status.HTTP_502_BAD_GATEWAY
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@router.get("", response_model=SessionResponse, summary="Current session snapshot")
async def get_session(facade: ChatFacade = Depends(get_facade)):
    return {"session": facade.current_session()}


@router.post("/connect", response_model=StatusResponse, summary="Connect to the MCP server")
async def connect(facade: ChatFacade = Depends(get_facade)):
    result = await facade.connect()
    return {
        "success": result.is_success,
        "is_connected": facade.current_session().is_connected,
        "error": str(result.error) if result.error else None,
    }


@router.post("/disconnect", response_model=StatusResponse, summary="Close the MCP channel")
async def disconnect(facade: ChatFacade = Depends(get_facade)):
    result = await facade.disconnect()
    return {
        "success": result.is_success,
        "is_connected": facade.current_session().is_connected,
        "error": str(result.error) if result.error else None,
    }


@router.post("/messages", response_model=MessageResponse, summary="Send a chat message")
async def send_message(
    input_data: SendMessageInput,
    facade: ChatFacade = Depends(get_facade),
):
    result = await facade.send_message(input_data.content)
    if result.is_failure:
        raise HTTPException(status_code=_status_for(result.error), detail=str(result.error))
    return {"message": result.value}


async def _forward_updates(websocket: WebSocket, facade: ChatFacade) -> None:
    async for session in facade.session_stream():
        await websocket.send_text(session.model_dump_json())


@router.websocket("/stream")
async def stream_session(websocket: WebSocket):
    """Push every session snapshot to the client as JSON."""
    await websocket.accept()
    facade: Optional[ChatFacade] = getattr(websocket.app.state, "facade", None)
    if facade is None:
        logger.warning("Session stream requested before the chat session was initialized")
        await websocket.close(
            code=status.WS_1011_INTERNAL_ERROR,
            reason="Chat session is not initialized",
        )
        return
    forwarder = asyncio.create_task(_forward_updates(websocket, facade))
    try:
        # Incoming frames are ignored; receiving only detects the disconnect
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        # normal client disconnect
        pass
    except Exception:
        logger.exception("Unhandled error in session stream")
    finally:
        forwarder.cancel()
        try:
            await forwarder
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("Session stream forwarder failed")
