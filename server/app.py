"""FastAPI application for diagram generation, layout and storage."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from server.pipeline_routes import router as pipeline_router
from server.diagram_routes import router as diagram_router
from server.db import init_all
from server.diagram_db import DIAGRAM_DB_PATH
from server.logging_config import configure_logging

# CORS origins - configurable via environment variable
# Use comma-separated values for multiple origins, or "*" for all (development only)
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and initialize database tables on startup."""
    configure_logging()
    init_all()
    yield


app = FastAPI(
    title="FlowForge API",
    description="API server for generating, repairing, laying out and saving diagrams",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# pipeline routes first: /diagrams/formats must not be taken as a diagram id
app.include_router(pipeline_router, prefix="/api")
app.include_router(diagram_router, prefix="/api")


@app.get("/")
def root():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": "0.1.0",
        "diagram_db": str(DIAGRAM_DB_PATH),
        "generator_configured": bool(os.getenv("GENERATOR_URL")),
        "endpoints": {
            "generate": "/api/diagrams/generate",
            "assemble": "/api/diagrams/assemble",
            "validate": "/api/diagrams/validate",
            "layout": "/api/diagrams/layout",
            "formats": "/api/diagrams/formats",
            "diagrams": "/api/diagrams",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
