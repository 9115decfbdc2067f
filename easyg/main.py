import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from easyg.config import settings
from easyg.db import async_session
from easyg.program import store
from easyg.program.router import router as program_router

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_schema:
        async with async_session() as session:
            await store.ensure_schema(session)
        logger.info("device_programs table ready")
    if not settings.pattern_oracle:
        logger.warning("PATTERN_ORACLE is not set; compile requests will return 503")
    yield


app = FastAPI(title="EasyG Program Compiler", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(program_router)


@app.get("/")
async def root() -> dict:
    return {
        "status": "ok",
        "docs": "/docs",
        "health": "/health",
        "program": {
            "answers": "/program/answers",
            "download": "/program/download?mac_address={mac}",
            "temps_lubrication": "/program/temps-lubrication?mac_address={mac}",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
