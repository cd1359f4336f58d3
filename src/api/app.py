"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import calculate, comparison, deals, make_apr
from src.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Car Deal Analyzer",
    description="Car purchase financing calculator and deal comparison",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(calculate.router)
app.include_router(deals.router)
app.include_router(comparison.router)
app.include_router(make_apr.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
