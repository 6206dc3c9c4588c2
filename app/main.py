"""
Appointment Booking Assistant - FastAPI Application

Thin HTTP wrapper around the conversation engine. The client holds the
conversation and the partial appointment; every request sends both and
gets back the reply plus the updated appointment.
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from engine import advance
from booking import APPOINTMENT_SPEC
from .models import Appointment, ChatRequest, ChatResponse

VERSION = "1.0.0"

ERROR_MESSAGE = "Sorry, I encountered an error processing your request."

# Load environment variables from the repo .env, then the working directory
env_paths = [
    Path(__file__).parent.parent / ".env",
    Path.cwd() / ".env",
]
for env_path in env_paths:
    if env_path.exists():
        load_dotenv(env_path)
        break
else:
    load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if os.getenv("DEBUG", "false").lower() == "true" else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _allowed_origins() -> list:
    """Parse ALLOWED_ORIGINS (comma-separated, default '*')."""
    raw = os.getenv("ALLOWED_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - log the booking configuration."""
    logger.info("=" * 60)
    logger.info(f"Starting Appointment Booking Assistant v{VERSION}")
    logger.info(f"Services: {', '.join(APPOINTMENT_SPEC.services)}")
    logger.info(f"Allowed origins: {_allowed_origins()}")
    logger.info("=" * 60)

    yield

    logger.info("Shutting down Appointment Booking Assistant")


app = FastAPI(
    title="Appointment Booking Assistant",
    description="Slot-filling chat API for booking appointments",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Answer malformed request bodies with the apology instead of a 422.

    Covers unparseable JSON, a non-list history, unknown roles and
    null content.
    """
    logger.error(
        f"Chat API invalid request: path={request.url.path} errors={exc.errors()}"
    )
    return JSONResponse(status_code=500, content={"message": ERROR_MESSAGE})


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}


@app.post("/api/chat", response_model=ChatResponse, response_model_exclude_none=True)
async def chat(request: ChatRequest):
    """
    Process the next user message.

    The engine fills what it can from the last message and picks the
    next question. Any failure (e.g. an empty history) is logged and
    answered with a generic apology; no appointment is returned, so the
    client keeps the record it already has.
    """
    current = request.appointment.model_dump(exclude_none=True) if request.appointment else {}
    logger.info(
        f"Chat turn: messages={len(request.messages)}, "
        f"filled={sorted(current.keys())}"
    )

    try:
        record, reply = advance(request.messages, current)
    except Exception as e:
        logger.error(f"Chat API error: {type(e).__name__}: {e}", exc_info=True)
        return JSONResponse(status_code=500, content={"message": ERROR_MESSAGE})

    new_keys = sorted(set(record.keys()) - set(current.keys()))
    if new_keys:
        logger.info(f"Chat turn extracted: {new_keys}")

    return ChatResponse(message=reply, appointment=Appointment(**record))


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", "8000"))
    host = os.getenv("HOST", "0.0.0.0")
    uvicorn.run(app, host=host, port=port)
