# gateway/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from agent.errors import InvalidInputError
from agent.planner_agent import process_chat
from common.api_messages import ChatRequest, ChatResponse, ErrorResponse, HealthResponse
from common.config import settings

# Configure logging
# The log level is loaded from the settings instance
logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan manager for the FastAPI application.
    Logs the effective configuration on startup.
    """
    logger.info("--- Gateway Startup ---")
    logger.info(f"Host: {settings.HOST}")
    logger.info(f"Port: {settings.PORT}")
    logger.info(f"Log Level: {settings.LOG_LEVEL}")
    logger.info(f"Model: {settings.OPENAI_MODEL_NAME}")
    logger.info("-----------------------")
    yield
    logger.info("--- Gateway Shutdown ---")


# Create the FastAPI app instance with the lifespan manager
app = FastAPI(
    title="App Planner Gateway",
    description="Chat API that keeps an app plan up to date as the user describes their idea",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    return _error(400, "Invalid request body")


@app.get("/api/health", tags=["Health"], response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint to verify that the server is running.
    """
    logger.info("Health check endpoint was called.")
    return HealthResponse()


@app.post(
    "/api/chat",
    tags=["Chat"],
    response_model=ChatResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(request: ChatRequest):
    """
    Runs one chat turn. The client sends the full history and its current
    plan every time; nothing is kept between requests.
    """
    try:
        return await process_chat(request)
    except InvalidInputError as e:
        return _error(400, str(e))
    except Exception as e:
        logger.error(f"Error in chat endpoint: {e}", exc_info=True)
        return _error(500, "Internal server error")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
