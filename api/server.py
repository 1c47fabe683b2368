"""
The Jar capacity API server.

Run:
    python -m api.server
"""

import logging
import os

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import jar
from api.capacity_router import capacity_router
from jar import config
from jar.observability import CorrelationIdMiddleware, configure_logging

logger = logging.getLogger(__name__)

app = FastAPI(
    title="The Jar Capacity API",
    description="Weekly capacity, shield state and jar fill level",
    version=jar.__version__,
)

# CORS middleware - configurable via CORS_ORIGINS env var
# Dev default: allow all origins; Production: set CORS_ORIGINS to comma-separated list
cors_origins_env = os.getenv("CORS_ORIGINS", "*")
cors_origins = (
    ["*"] if cors_origins_env == "*" else [o.strip() for o in cors_origins_env.split(",")]
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

app.include_router(capacity_router, prefix="/api/capacity")


@app.get("/api/health")
def health():
    return {"status": "healthy", "version": jar.__version__}


def main():
    configure_logging(config.LOG_LEVEL, config.LOG_JSON)
    logger.info("Starting capacity API on %s:%s", config.API_HOST, config.API_PORT)
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)


if __name__ == "__main__":
    main()
