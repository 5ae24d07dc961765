import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..app import ChatFacade
from ..config import Settings, get_settings
from .routes import health_router, info_router, session_router, tools_router


def create_app(
    settings: Optional[Settings] = None,
    facade: Optional[ChatFacade] = None,
    logger: Optional[logging.Logger] = None,
) -> FastAPI:
    settings = settings or get_settings()
    logger = logger or logging.getLogger("mcp_chat")

    app = FastAPI(
        title="MCP Chat",
        description="Chat session bridging a Claude completion provider \
        and a Model Context Protocol tool server",
        version="0.1.0"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, specify exact origins
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.facade = facade

    app.include_router(session_router, prefix="/session", tags=["Session"])
    app.include_router(tools_router, prefix="/tools", tags=["Tools"])
    app.include_router(info_router, prefix="/info", tags=["System Info"])
    app.include_router(health_router, tags=["System Info"])

    @app.on_event("startup")
    async def startup_event():
        logger.info(f"Server starting on {settings.host}:{settings.port}")
        if app.state.facade is None:
            app.state.facade = ChatFacade.from_settings(settings, logger=logger)

        result = await app.state.facade.connect()
        if result.is_success:
            logger.info("Connected to MCP server")
        else:
            logger.warning(f"Starting without MCP connection: {result.error}")

    @app.on_event("shutdown")
    async def shutdown_event():
        if app.state.facade is not None:
            await app.state.facade.aclose()
        logger.info("Server stopped")

    return app
