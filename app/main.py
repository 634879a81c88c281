"""
FastAPI application entry point.

Run:  python -m uvicorn app.main:app --reload --port 8000
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
)

from fastapi import FastAPI

from services.ini_service import IniService
from app.routes import router, init_service

_service = IniService()
init_service(_service)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Release every open handle's path lock
    _service.close_all()


app = FastAPI(title="INI Editor", lifespan=lifespan)

# API routes
app.include_router(router)
