"""
Main FastAPI application for the Umpire Planner.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from umpire_planner import __version__
from umpire_planner.api import routes
from umpire_planner.core.config import CORS_ORIGINS
from umpire_planner.core.logging_config import setup_logging

setup_logging()

app = FastAPI(
    title="Umpire Planner API",
    description="API for poll slot calculation and umpire assignment conflict detection",
    version=__version__
)

# Enable CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(routes.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Umpire Planner API",
        "version": __version__,
        "endpoints": {
            "slots": "/api/slots/group",
            "conflicts": "/api/conflicts",
            "health": "/api/health"
        }
    }
