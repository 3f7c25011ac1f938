import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlmodel.ext.asyncio.session import AsyncSession
from starlette.middleware.cors import CORSMiddleware

from app.api.v1.api import router
from app.core.config import settings
from app.core.errors import GenerationFailure, InvalidGenerationRequest
from app.db.database import engine, get_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: warm up DB pool. Shutdown: dispose engine."""
    async with engine.begin() as conn:
        await conn.execute(text("SELECT 1"))
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan,
)


# ── Exception Handlers ────────────────────────────────────────

@app.exception_handler(InvalidGenerationRequest)
async def invalid_request_handler(request: Request, exc: InvalidGenerationRequest):
    return JSONResponse(
        status_code=422,
        content={
            "detail": str(exc),
            "errors": [{"field": f.field, "message": f.message} for f in exc.fields],
        },
    )


@app.exception_handler(GenerationFailure)
async def generation_failure_handler(request: Request, exc: GenerationFailure):
    logger.warning("Generation failed: %s", exc)
    return JSONResponse(
        status_code=502,
        content={"detail": "Failed to generate content. Please try again."},
    )


# Ensures 500s return JSON through CORS
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# ── Middleware ────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ───────────────────────────────────────────────────

app.include_router(router, prefix=settings.API_V1_STR)


# ── Health / Root ─────────────────────────────────────────────

@app.get("/")
def read_root():
    return {"message": "Welcome to the Inkwell API"}


@app.get("/db_check")
async def db_check(db: AsyncSession = Depends(get_db)):
    try:
        result = await db.execute(text("SELECT 1"))
        result.scalar()
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        return {
            "status": "unhealthy",
            "database": "disconnected",
            "error": str(e),
        }
