import uvicorn
from fastapi import FastAPI
import logging

from clue_chat.config import settings

# --- Logging Configuration ---
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logging.basicConfig(
    level=settings.log_level,
    format=LOG_FORMAT,
    handlers=[
        logging.FileHandler(settings.log_file), # Log to a file
        logging.StreamHandler()      # Also log to console
    ]
)

logger = logging.getLogger(__name__)

from clue_chat.api.endpoints import search

# --- Initialize FastAPI App ---
app = FastAPI(
    title="Clue.ai Chat API",
    description="Streams canned assistant replies character by character over Server-Sent Events.",
    version="0.1.0",
)

# --- API Routers ---
app.include_router(search.router, prefix="/api/v1/search")

# --- Root Endpoint ---
@app.get("/", tags=["Status"])
async def read_root():
    """Basic status check endpoint."""
    return {"status": "Clue.ai Chat API is running!"}

# --- Startup / Shutdown Events ---
@app.on_event("startup")
async def startup_event():
    logger.info("-"*20 + " Application Startup " + "-"*20)
    logger.info("Application startup complete.")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("-"*20 + " Application Shutdown " + "-"*20)
    logger.info("Application shutdown complete.")


def run():
    """Entry point for the `clue-chat-server` script."""
    logger.info("Starting Uvicorn server for development...")
    uvicorn.run(
        "clue_chat.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info" # Uvicorn's own messages
    )


# --- Run with Uvicorn (for local development) ---
if __name__ == "__main__":
    run()
