import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stayplanner.core.config import Settings
from stayplanner.db.base import Base
from stayplanner.db.session import engine
from stayplanner.db import models  # noqa: F401  (registers tables on Base)
from stayplanner.api.routers import (
    properties as properties_router,
    reservations as reservations_router,
)

settings = Settings()

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.PROJECT_NAME)

# ---------------------------
# CORS
# ---------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------
# Startup
# ---------------------------
@app.on_event("startup")
async def on_startup():
    logger.setLevel(settings.LOG_LEVEL.upper())
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("%s ready (db=%s)", settings.PROJECT_NAME, engine.url.render_as_string(hide_password=True))

# ---------------------------
# Routers
# ---------------------------
app.include_router(properties_router.router, prefix="/api", tags=["properties"])
app.include_router(reservations_router.router, prefix="/api/reservations", tags=["reservations"])

# ---------------------------
# Health check
# ---------------------------
@app.get("/ping")
async def ping():
    return {"status": "ok"}

# ---------------------------
# Run
# ---------------------------
if __name__ == "__main__":
    uvicorn.run("stayplanner.main:app", host="0.0.0.0", port=8000, reload=True)
