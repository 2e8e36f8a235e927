from __future__ import annotations

from fastapi import APIRouter, Depends

from ...config import AppConfig
from ..dependencies import get_config

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness and the active input limit")
def health(config: AppConfig = Depends(get_config)) -> dict[str, object]:
    return {"status": "ok", "max_input_bytes": config.max_input_bytes}


__all__ = ["router"]
