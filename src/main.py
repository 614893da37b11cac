"""FastAPI application for page object compilation."""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.routes import compile as compile_routes
from src.translator.registries import ACTION_CATALOG, MATCHERS

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Load environment variables
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    # Startup
    logger.info("Starting Page Object Compiler Service...")
    logger.info(f"Element interfaces: {', '.join(sorted(ACTION_CATALOG))}")
    logger.info(f"Matchers: {', '.join(sorted(MATCHERS))}")
    logger.info(f"Server running on port {os.getenv('PORT', '8080')}")
    logger.info("Ready to compile page objects")
    yield
    # Shutdown
    logger.info("Shutting down Page Object Compiler Service...")


# Create FastAPI app
app = FastAPI(
    title="Page Object Compiler",
    description="Compiles declarative page objects to typed source",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
cors_origins = os.getenv("CORS_ORIGINS", "*").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(compile_routes.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
