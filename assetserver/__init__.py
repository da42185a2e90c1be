"""Small HTTP server for a web front end, its wasm bundle and a few API routes."""

__version__ = "0.1.0"
