"""FastAPI application entry point."""

import logging
import os
import sys
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from .env file before settings are read
load_dotenv()

# main.py is at src/api/main.py, src is two levels up
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.config import RECORD_STORE_MONGODB, get_settings
from api.routes import auth, health, projects, users
from adapter.mongodb.connection import get_mongodb_client
from adapter.mongodb.indexes import ensure_all_indexes
from utils.logging import setup_structured_logging

setup_structured_logging()

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Portfolio API"
API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: validate configuration and prepare the store."""
    # Fails fast when JWT_SECRET_KEY is missing
    settings = get_settings()
    logger.info("Starting", extra={"version": VERSION, "recordStore": settings.record_store})

    if settings.record_store == RECORD_STORE_MONGODB:
        client = get_mongodb_client(settings.mongo_url)
        if client and ensure_all_indexes(client[settings.mongodb_database]):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")

    yield


app = FastAPI(
    title=SERVICE_NAME,
    description="Portfolio showcase API - accounts, projects and likes",
    version=VERSION,
    lifespan=lifespan,
)

# With a wildcard origin, browsers refuse credentialed requests
cors_origins_env = os.getenv("CORS_ORIGINS", "*")
if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains"
    )
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
    allow_credentials = True
    logger.info("CORS configured with specific origins", extra={"origins": cors_origins})

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix=API_PREFIX)
app.include_router(auth.router, prefix=API_PREFIX)
app.include_router(users.router, prefix=API_PREFIX)
app.include_router(projects.router, prefix=API_PREFIX)


@app.get("/")
async def root():
    """Service banner with an index of the main endpoints."""
    return {
        "message": f"Welcome to {SERVICE_NAME}",
        "version": VERSION,
        "endpoints": {
            "health": f"{API_PREFIX}/health",
            "projects": f"{API_PREFIX}/projects",
            "auth": {
                "register": f"POST {API_PREFIX}/auth/register",
                "login": f"POST {API_PREFIX}/auth/login",
            },
            "user": {
                "profile": f"{API_PREFIX}/user/profile",
            },
        },
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 5000))
    # Application logs go through structured logging; skip uvicorn's access log
    uvicorn.run(app, host="0.0.0.0", port=port, access_log=False)
