from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

from fastapi import FastAPI
from sqlalchemy import text
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.api.v1 import batteries
from app.core.logging import RequestLoggingMiddleware, setup_logging
from app.models.database import get_engine


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    yield
    await get_engine().dispose()


def create_app() -> FastAPI:
    setup_logging(json_format=settings.log_json, level=settings.log_level)

    application = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(RequestLoggingMiddleware)

    application.include_router(
        batteries.router, prefix="/api/v1/batteries", tags=["batteries"]
    )

    @application.get("/health")
    async def health_check() -> dict:
        from app.models.database import get_session_factory

        result: dict = {"status": "ok", "services": {}}

        try:
            async with get_session_factory()() as session:
                await session.execute(text("SELECT 1"))
            result["services"]["database"] = "ok"
        except Exception as e:
            result["services"]["database"] = f"error: {e}"
            result["status"] = "degraded"

        return result

    return application


app = create_app()
