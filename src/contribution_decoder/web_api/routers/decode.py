"""
Decode Router
=============
Endpoints for decoding contribution payloads.
"""
from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse

from contribution_decoder import api as core_api
from contribution_decoder.core.errors import PayloadError
from contribution_decoder.diagnostics import (
    CollectingDiagnostics,
    FanOutDiagnostics,
    LoggingDiagnostics,
)
from contribution_decoder.reports.exporters import export_html
from contribution_decoder.web_api.config import settings
from contribution_decoder.web_api.schemas.decode import (
    ContributionOut,
    DecodeRequest,
    DecodeResponse,
    DiagnosticOut,
)

router = APIRouter()


def _check_size(request: DecodeRequest) -> None:
    if len(request.payload) > settings.MAX_PAYLOAD_CHARS:
        raise HTTPException(
            status_code=413,
            detail=f"Payload exceeds {settings.MAX_PAYLOAD_CHARS} characters",
        )


@router.post("/", response_model=DecodeResponse)
async def decode_payload(request: DecodeRequest):
    """
    Decode a payload into contribution rows.

    - **payload**: standard base64 of a CBOR map `{data: [{bucket, value}, ...]}`

    Items that are malformed or have a zero value are skipped and listed in
    `diagnostics`; a payload that is not base64 or not CBOR yields 422.
    """
    _check_size(request)
    collected = CollectingDiagnostics()
    try:
        contributions = await core_api.decode_payload_async(
            request.payload,
            diagnostics=FanOutDiagnostics([collected, LoggingDiagnostics()]),
        )
    except PayloadError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return DecodeResponse(
        status="complete" if contributions else "empty",
        count=len(contributions),
        contributions=[ContributionOut.from_record(c) for c in contributions],
        diagnostics=[DiagnosticOut(**d.to_dict()) for d in collected.items],
    )


@router.post("/html", response_class=HTMLResponse)
async def decode_payload_html(request: DecodeRequest):
    """
    Decode a payload and return the rendered HTML table fragment.
    """
    _check_size(request)
    try:
        contributions = await core_api.decode_payload_async(request.payload)
    except PayloadError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return HTMLResponse(export_html(contributions))
