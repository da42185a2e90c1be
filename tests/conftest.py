import pytest
from fastapi.testclient import TestClient

from assetserver.config import ServerConfig
from assetserver.routes import build_root_router


@pytest.fixture
def assets(tmp_path):
    static = tmp_path / "static"
    wasm = tmp_path / "wasm"
    static.mkdir()
    wasm.mkdir()
    (static / "index.html").write_text("<h1>front</h1>")
    (static / "app.js").write_bytes(b"console.log('front');\n")
    (wasm / "module.wasm").write_bytes(b"\x00asm\x01\x00\x00\x00")
    return static, wasm


@pytest.fixture
def config(assets):
    static, wasm = assets
    return ServerConfig(static_dir=static, wasm_dir=wasm)


@pytest.fixture
def client(config):
    return TestClient(build_root_router(config))
