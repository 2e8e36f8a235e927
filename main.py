"""ASGI entry point for ``uvicorn main:app``."""

from fastapi import FastAPI, HTTPException

from svgready.api import create_app


def _disabled_app(reason: str) -> FastAPI:
    fallback = FastAPI(title="SVG Ready (disabled)", version="0.1.0")

    @fallback.api_route("/{path:path}", methods=["GET", "POST"])
    async def api_disabled(path: str) -> dict[str, str]:
        raise HTTPException(status_code=503, detail=reason)

    return fallback


try:
    app = create_app()
except RuntimeError as exc:
    app = _disabled_app(
        f"{exc} Set enable_local_api = true in config.toml or SVGREADY_ENABLE_LOCAL_API=1."
    )
