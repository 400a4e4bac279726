"""
Pydantic Schemas
===============
Request and response models for the API.
"""
from .decode import ContributionOut, DecodeRequest, DecodeResponse, DiagnosticOut

__all__ = ["ContributionOut", "DecodeRequest", "DecodeResponse", "DiagnosticOut"]
