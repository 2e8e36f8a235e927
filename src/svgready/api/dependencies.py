"""FastAPI dependency providers for the conversion service."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from ..config import AppConfig
from ..core import ConversionService
from ..errors import ErrorCategory


def get_service(request: Request) -> ConversionService:
    service: ConversionService | None = getattr(request.app.state, "service", None)
    if service is None:
        raise HTTPException(
            status_code=503,
            detail={"code": ErrorCategory.SERVER_ERROR.value, "message": "Conversion service not ready."},
        )
    return service


def get_config(service: ConversionService = Depends(get_service)) -> AppConfig:
    return service.config


__all__ = ["get_config", "get_service"]
