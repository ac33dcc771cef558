"""FastAPI backend for Chronicles.

Routes:
  GET  /health                 liveness
  GET  /api/modes              available narrative modes
  POST /api/start-story        open a session and get the opening reply
  POST /api/continue-story     send a player turn
  GET  /api/session/{user_id}  fetch a stored session
  POST /api/generate           one-shot story from a single prompt

Run with ``python -m src.api.server``.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from src.api.schemas import ContinueStoryRequest, GenerateRequest, StartStoryRequest
from src.engine.story_service import InvalidRequest, SessionNotFound, StoryService
from src.utils.api_client import CompletionError

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="[%(asctime)s] %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def create_app(service: Optional[StoryService] = None) -> FastAPI:
    """Build the app around *service* (a fresh in-memory one by default)."""
    service = service or StoryService()
    app = FastAPI(title="Chronicles Backend", version="1.0.0")
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_origin_regex=settings.CORS_ORIGIN_REGEX or None,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("Request: %s %s", request.method, request.url.path)
        return await call_next(request)

    # ── error envelope ────────────────────────────────────
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected body on %s: %s", request.url.path, exc.errors())
        return _error(400, "Invalid request body")

    @app.exception_handler(InvalidRequest)
    async def invalid_request(request: Request, exc: InvalidRequest) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "Internal server error")

    # ── routes ────────────────────────────────────────────
    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"status": "OK", "message": "Chronicles Backend Running"}

    @app.get("/api/modes")
    def modes() -> Dict[str, Any]:
        return {"success": True, "modes": service.list_modes()}

    @app.post("/api/start-story")
    def start_story(req: StartStoryRequest) -> Dict[str, Any]:
        try:
            result = service.start_story(req.user_id, req.context, req.mode)
        except CompletionError:
            logger.exception("Failed to start story for user %s", req.user_id)
            raise HTTPException(status_code=500, detail="Failed to start story")
        return {"success": True, **result}

    @app.post("/api/continue-story")
    def continue_story(req: ContinueStoryRequest) -> Dict[str, Any]:
        try:
            result = service.continue_story(req.user_id, req.user_message)
        except SessionNotFound:
            raise HTTPException(status_code=404, detail="Session not found. Start a new story.")
        except CompletionError:
            logger.exception("Failed to continue story for user %s", req.user_id)
            raise HTTPException(status_code=500, detail="Failed to continue story")
        return {"success": True, **result}

    @app.get("/api/session/{user_id:path}")
    def get_session(user_id: str) -> Dict[str, Any]:
        try:
            result = service.get_session(user_id)
        except SessionNotFound:
            raise HTTPException(status_code=404, detail="Session not found")
        return {"success": True, **result}

    @app.post("/api/generate")
    def generate(req: GenerateRequest) -> Dict[str, Any]:
        try:
            result = service.generate(req.prompt)
        except CompletionError:
            logger.exception("Failed to generate story")
            raise HTTPException(status_code=500, detail="Failed to generate story")
        return {"success": True, **result}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    from src.nlg.modes import MODES

    logger.info("Server running on port %s", settings.PORT)
    logger.info("Available modes: %s", ", ".join(MODES))
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
