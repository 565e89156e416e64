"""
RiskForecast FastAPI Application.

  POST /analyze       → run the risk pipeline, return the RiskReport
  GET  /audit/recent  → latest audit trail entries
  GET  /health        → {"status": "ok", ...}
"""

from __future__ import annotations

import logging

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from riskforecast.api.routes.analyze import router as analyze_router
from riskforecast.api.routes.health import VERSION, router as health_router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("riskforecast")

app = FastAPI(
    title="RiskForecast",
    description="Multi-factor project risk scoring and prediction engine",
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router)
app.include_router(analyze_router)
