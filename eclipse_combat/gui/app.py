"""FastAPI application exposing the combat simulator."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from .api_routes import router

# Initialize FastAPI app
app = FastAPI(
    title="Eclipse Combat Simulator",
    description="Monte Carlo battle odds for Eclipse fleets",
    version=__version__,
)

# Browser front ends are served from a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api")


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "eclipse-combat"}
