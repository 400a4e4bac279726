"""
FastAPI Application
==================
Main entry point for the Contribution Decoder API.

Run with:
    uvicorn contribution_decoder.web_api.main:app --reload
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contribution_decoder import __version__
from contribution_decoder.web_api.config import settings
from contribution_decoder.web_api.routers import decode, health

logging.getLogger("contribution_decoder").setLevel(settings.LOG_LEVEL.upper())

# Create application
app = FastAPI(
    title="Contribution Decoder API",
    description="Decode base64 CBOR contribution payloads into binary/decimal rows",
    version=__version__,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(decode.router, prefix="/decode", tags=["Decode"])


@app.get("/")
async def root():
    """Root endpoint - API info"""
    return {
        "name": "Contribution Decoder API",
        "version": __version__,
        "docs": "/docs" if settings.DEBUG else "disabled",
    }


# For running directly: python -m contribution_decoder.web_api.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
