import logging
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from connectn.core.config import settings, configure_logging
from connectn.engine.errors import ConnectNError
from connectn.schemas.ai_schema import MoveRequest, MoveResponse, HintResponse, DifficultyResponse
from connectn.services.ai_service import ai_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info(
        "Connect-N engine ready (default depth %d, %d difficulty presets)",
        settings.engine.depth, len(settings.difficulties),
    )
    yield


app = FastAPI(title="Connect-N Engine", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.server.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/difficulties", response_model=List[DifficultyResponse])
def get_difficulties():
    """Returns the configured AI presets for the frontend's opponent picker."""
    return ai_service.list_difficulties()


# Sync handlers: the search is CPU bound, FastAPI runs these in its thread pool.
# Each request builds its own engine, so no cache is shared between threads.
@app.post("/api/ai/move", response_model=MoveResponse)
def get_ai_move(request: MoveRequest):
    try:
        return ai_service.get_move(request)
    except ConnectNError as e:
        logger.warning("Rejected move request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/api/ai/hints", response_model=HintResponse)
def get_ai_hints(request: MoveRequest):
    try:
        return ai_service.get_hints(request)
    except ConnectNError as e:
        logger.warning("Rejected hint request: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
