from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, HTTPException

from ...core import ConversionService
from ...errors import ConversionError, ErrorCategory
from ..dependencies import get_service
from ..schemas import ConvertRequest, ConvertResponse, ConvertResults

router = APIRouter(tags=["conversion"])

_STATUS_BY_CATEGORY = {
    ErrorCategory.EMPTY_INPUT: 400,
    ErrorCategory.INVALID_SVG: 400,
    ErrorCategory.TOO_LARGE: 413,
    ErrorCategory.SERVER_ERROR: 500,
}


@router.post("/convert", summary="Sanitize and encode an SVG document", response_model=ConvertResponse)
async def convert_svg(
    payload: ConvertRequest,
    service: ConversionService = Depends(get_service),
) -> ConvertResponse:
    options = payload.to_options(debug_default=service.config.runtime.debug)
    outcome = await asyncio.to_thread(service.convert_text, payload.svg, options)
    if isinstance(outcome, ConversionError):
        raise HTTPException(
            status_code=_STATUS_BY_CATEGORY[outcome.category],
            detail=outcome.to_payload(debug=options.debug),
        )
    return ConvertResponse(
        results=ConvertResults.from_result(outcome, show_base64=options.emit_base64)
    )


__all__ = ["router"]
