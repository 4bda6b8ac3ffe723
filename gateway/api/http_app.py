# ==============================
# FastAPI App Factory
# ==============================
from __future__ import annotations

from fastapi import FastAPI

from gateway.api.routes_riap import router as riap_router


def create_app() -> FastAPI:
    app = FastAPI(title="remote_use", version="0.1.0")
    app.include_router(riap_router, prefix="/api")
    return app
