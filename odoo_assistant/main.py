# odoo_assistant/main.py
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from odoo_assistant.config import Settings, get_settings
from odoo_assistant.errors import (
    HistoryTooLong,
    InvalidHistory,
    InvalidRequest,
    MissingField,
    ProviderError,
    RelayError,
    StartupConfigError,
)
from odoo_assistant.logging_middleware import RequestLoggingMiddleware
from odoo_assistant.schemas import ChatRequest, ChatResponse, ErrorResponse, HealthResponse
from odoo_assistant.services.gemini_client import GeminiClient, ProviderClient
from odoo_assistant.services.prompt_builder import (
    ODOO_SYSTEM_PROMPT,
    build_messages,
    extend_history,
)

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


def build_provider(settings: Settings) -> ProviderClient:
    if not settings.google_api_key:
        raise StartupConfigError("GOOGLE_API_KEY environment variable is not set")
    return GeminiClient(api_key=settings.google_api_key, model_name=settings.gemini_model)


# --- Provider lifecycle ---
@asynccontextmanager
async def lifespan(_app: FastAPI):
    _app.state.provider = build_provider(get_settings())
    logger.info("Provider ready: model=%s", get_settings().gemini_model)
    yield


# --- FastAPI App Initialization ---
app = FastAPI(title="Odoo Assistant API", version="0.1.0", lifespan=lifespan)

# --- CORS Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


def get_provider(request: Request) -> ProviderClient:
    return request.app.state.provider


# --- Error mapping ---
@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError):
    if exc.status_code >= 500:
        logger.error("Chat request failed: %s", exc, exc_info=exc)
    else:
        logger.warning("Rejected chat request: %s", exc.public_message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(e.get("type") == "missing" and tuple(e.get("loc", ())) == ("body",) for e in errors):
        # No body at all reads the same as a body without a message
        return await relay_error_handler(request, MissingField())
    if any("conversationHistory" in e.get("loc", ()) for e in errors):
        return await relay_error_handler(request, InvalidHistory(str(errors)))
    return await relay_error_handler(request, InvalidRequest(str(errors)))


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    error = ProviderError(f"unhandled error: {exc!r}")
    error.__cause__ = exc
    return await relay_error_handler(request, error)


# --- API Endpoints ---
@app.post(
    "/api/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat_handler(
    request: ChatRequest,
    provider: ProviderClient = Depends(get_provider),
    settings: Settings = Depends(get_settings),
):
    """
    Relays one chat turn to the model with the Odoo assistant persona and
    returns the reply together with the extended history.
    """
    if not request.message:
        raise MissingField()

    history = request.conversation_history or []
    limit = settings.max_history_turns
    if limit and len(history) > limit:
        raise HistoryTooLong(f"{len(history)} turns exceeds limit of {limit}")

    messages = build_messages(history, request.message)
    logger.info("Chat turn: history_turns=%s message_len=%s", len(history), len(request.message))

    try:
        reply = await provider.generate(messages, ODOO_SYSTEM_PROMPT)
    except ProviderError:
        raise
    except Exception as e:
        raise ProviderError(f"unexpected provider failure: {e!r}") from e
    if not isinstance(reply, str):
        raise ProviderError(f"provider returned {type(reply).__name__}, expected str")

    logger.info("Model replied with %s chars", len(reply))
    return ChatResponse(
        reply=reply,
        conversation_history=extend_history(history, request.message, reply),
    )


@app.get("/api/health", response_model=HealthResponse)
def health():
    return HealthResponse()


def run():
    """Console entry point: refuse to start without an API key, then serve."""
    settings = get_settings()
    if not settings.google_api_key:
        logger.error("GOOGLE_API_KEY environment variable is not set")
        sys.exit(1)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
