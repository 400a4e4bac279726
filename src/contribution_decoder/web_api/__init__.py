"""
Contribution Decoder Web API
============================
FastAPI-based REST API for decoding contribution payloads.

Quick Start:
    uvicorn contribution_decoder.web_api.main:app --reload
"""
from .main import app

__all__ = ["app"]
