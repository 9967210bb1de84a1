"""
FastAPI application exposing the workspace agent.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from ide_agent.api.routers import details_for, error_response, status_for
from ide_agent.api.routers import router as api_router
from ide_agent.container import container
from ide_agent.exceptions import BaseAppError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Get logger for this module
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Show model info
    try:
        model_info = container.get_reasoning_engine().get_model_info()
        logger.info(
            f"Using LLM: {model_info.get('model', 'Unknown')} from {model_info.get('provider', 'Unknown')}"
        )
    except BaseAppError as e:
        logger.warning(f"Could not get model info: {e}")
    yield


# Create FastAPI app
app = FastAPI(title="IDE Agent API", lifespan=lifespan)
app.include_router(api_router)


@app.exception_handler(BaseAppError)
async def handle_app_error(request: Request, exc: BaseAppError):
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return error_response(status_code, str(exc), details_for(exc))
