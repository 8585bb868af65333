"""FastAPI app entry point for the duel engine."""

import logging

from fastapi import FastAPI

import config
from api.combat import router as combat_router
from api.content import router as content_router
from engine.content import default_bestiary, default_catalog

config.validate()
logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Duel Engine",
    description="Turn-based one-on-one combat resolution for narrative RPGs",
    version="0.1.0",
)

app.state.catalog = default_catalog()
app.state.bestiary = default_bestiary()

app.include_router(combat_router, prefix="/combat", tags=["Combat"])
app.include_router(content_router, prefix="/content", tags=["Content"])


@app.get("/")
def root() -> dict:
    """Root endpoint returning server info."""
    return {"name": "Duel Engine", "version": "0.1.0", "status": "running"}


@app.get("/health")
def health() -> dict:
    """Health check endpoint."""
    return {"healthy": True}
