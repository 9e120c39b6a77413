from __future__ import annotations

import logging
import time as _t
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from db import init_db
from middleware import RequestLogMiddleware
from routers import events as events_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_db()
    yield


app = FastAPI(title="events-api", version="1.0.0", lifespan=lifespan)

# CORS (adjust origins as needed)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLogMiddleware)

# Routers
app.include_router(events_router.router)


@app.get("/ping")
def ping():
    return {"ok": True, "ts": _t.time()}


@app.get("/health")
def health():
    return {"status": "ok", "env": settings.app_env}
