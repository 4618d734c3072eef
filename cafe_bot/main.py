"""
Cafe Bot Service - FastAPI application.

Hosts the Bot Framework messaging endpoint for the Contoso Cafe Bot.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from cafe_bot.api.bot.routes import router as bot_router
from cafe_bot.api.bot.runtime import build_runtime
from cafe_bot.config import settings
from cafe_bot.error_handlers import register_error_handlers

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown."""
    logger.info("Cafe Bot service starting up...")

    # Configuration errors are fatal here
    app.state.runtime = build_runtime()

    yield

    logger.info("Cafe Bot service shutting down...")


app = FastAPI(
    title="Contoso Cafe Bot",
    description="Bot Framework messaging endpoint for the Contoso Cafe Bot",
    version="1.0.0",
    lifespan=lifespan
)

register_error_handlers(app)

# Router already has /api prefix
app.include_router(bot_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "cafe-bot",
        "version": "1.0.0"
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "cafe-bot",
        "status": "running",
        "endpoints": {
            "health": "/health",
            "messages": "/api/messages"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
