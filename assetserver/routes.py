from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Optional, Union

from fastapi import APIRouter, FastAPI
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from . import __version__
from .config import ServerConfig, check_mount_prefixes
from .dispatch import install_tracing

logger = logging.getLogger(__name__)

# Some platform mime tables lack .wasm.
mimetypes.add_type("application/wasm", ".wasm")


# === API ===


def build_api_routes() -> APIRouter:
    router = APIRouter()

    @router.api_route("/healthz", methods=["GET", "HEAD"], response_class=PlainTextResponse)
    def healthz() -> str:
        return "OK"

    @router.api_route("/hello", methods=["GET", "HEAD"], response_class=PlainTextResponse)
    def hello() -> str:
        return "Hello, World!"

    @router.api_route("/bad", methods=["GET", "HEAD"], response_class=PlainTextResponse)
    def bad() -> PlainTextResponse:
        return PlainTextResponse("BOOM", status_code=404)

    return router


# === Static assets ===


def _static_files(directory: Union[str, Path], html: bool) -> StaticFiles:
    directory = Path(directory)
    if not directory.is_dir():
        logger.warning("asset directory %s does not exist; requests under it will fail", directory)
    return StaticFiles(directory=directory, html=html, check_dir=False)


def build_static_routes(directory: Union[str, Path]) -> StaticFiles:
    """Serve the front end, with ``index.html`` for directory paths."""
    return _static_files(directory, html=True)


def build_wasm_routes(directory: Union[str, Path]) -> StaticFiles:
    return _static_files(directory, html=False)


# === Root ===


def build_root_router(config: Optional[ServerConfig] = None) -> FastAPI:
    """Compose the full route table.

    Registration order is match priority: the API prefix, then the wasm
    prefix, then the catch-all static mount at ``/``.
    """
    config = config or ServerConfig()
    check_mount_prefixes([config.api_prefix, config.wasm_prefix])

    app = FastAPI(
        title="assetserver",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.include_router(build_api_routes(), prefix=config.api_prefix)
    app.mount(config.wasm_prefix, build_wasm_routes(config.wasm_dir), name="wasm")
    app.mount("/", build_static_routes(config.static_dir), name="static")
    install_tracing(app)
    return app
