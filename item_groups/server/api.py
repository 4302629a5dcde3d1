from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from item_groups.logging_config import configure_logging
from .questionnaire.router import router as questionnaire_router
from .settings import get_settings

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title="Item Groups API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(questionnaire_router)


@app.get("/api/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


__all__ = ["app"]
