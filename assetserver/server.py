from __future__ import annotations

import logging
import socket
import sys
from typing import Mapping, Optional

import uvicorn
from fastapi import FastAPI

from .config import ConfigError, ServerConfig, load_config
from .logs import init_logging
from .routes import build_root_router

logger = logging.getLogger(__name__)


class BindError(OSError):
    """The listening address is in use or cannot be bound."""


def bind_listener(host: str, port: int) -> socket.socket:
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
        sock.listen(2048)
    except OSError as exc:
        sock.close()
        raise BindError(exc.errno, f"cannot listen on {host}:{port}: {exc.strerror}") from exc
    sock.set_inheritable(True)
    return sock


def build_server(app: FastAPI, config: ServerConfig) -> uvicorn.Server:
    # log_config=None keeps uvicorn away from the handlers init_logging set up;
    # request lines come from the dispatcher, not uvicorn's access log.
    return uvicorn.Server(
        uvicorn.Config(
            app,
            host=config.host,
            port=config.port,
            log_config=None,
            access_log=False,
            lifespan="off",
        )
    )


def run(environ: Optional[Mapping[str, str]] = None) -> None:
    try:
        config = load_config(environ)
    except ConfigError as exc:
        init_logging()
        logger.error("invalid configuration: %s", exc)
        sys.exit(1)

    init_logging(config.log_level)
    app = build_root_router(config)
    try:
        sock = bind_listener(config.host, config.port)
    except BindError as exc:
        logger.error("%s", exc)
        sys.exit(1)

    host, port = sock.getsockname()[:2]
    logger.info("Listening on http://%s:%d", host, port)
    build_server(app, config).run(sockets=[sock])
