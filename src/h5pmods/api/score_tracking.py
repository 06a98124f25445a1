"""
H5P Score Tracking API
Empfängt xAPI Statements aus score-tracking.js und loggt den Score

Endpoints:
- POST /api/xapi - Nimmt ein xAPI Statement entgegen
- GET /api/health - Health Check

Nutzung:
    uvicorn h5pmods.api.score_tracking:app --host 127.0.0.1 --port 8086
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict

# Logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# FastAPI App
app = FastAPI(
    title="H5P Score Tracking",
    description="Loggt Scores aus H5P xAPI Statements",
    version="1.0.0"
)

# CORS für Browser-Zugriff aus eingebetteten H5P Inhalten
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "GET"],
    allow_headers=["*"],
)

# ========== MODELS ==========

class XAPIScore(BaseModel):
    model_config = ConfigDict(extra="allow")

    raw: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    scaled: Optional[float] = None


class XAPIResult(BaseModel):
    model_config = ConfigDict(extra="allow")

    score: Optional[XAPIScore] = None
    success: Optional[bool] = None
    completion: Optional[bool] = None


class XAPIStatement(BaseModel):
    model_config = ConfigDict(extra="allow")

    actor: Optional[dict[str, Any]] = None
    verb: Optional[dict[str, Any]] = None
    object: Optional[dict[str, Any]] = None
    result: Optional[XAPIResult] = None


class TrackRequest(BaseModel):
    statement: XAPIStatement


class TrackResponse(BaseModel):
    tracked: bool  # True wenn das Statement ein Ergebnis hatte
    score: Optional[XAPIScore] = None


# ========== ENDPOINTS ==========

@app.post("/api/xapi", response_model=TrackResponse)
async def track_statement(request: TrackRequest) -> TrackResponse:
    """Loggt den Score eines xAPI Statements"""
    result = request.statement.result
    if result is None:
        # Kein Ergebnis im Statement (z.B. "attempted")
        return TrackResponse(tracked=False)

    object_id = (request.statement.object or {}).get("id", "unknown")
    score = result.score
    if score is None:
        logger.info(f"xAPI result without score for {object_id}")
    else:
        logger.info(f"xAPI score for {object_id}: {score.raw}/{score.max} (scaled {score.scaled})")

    return TrackResponse(tracked=True, score=score)


@app.get("/api/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    from ..config import ModsConfig

    config = ModsConfig.from_env()
    uvicorn.run(app, host=config.api_host, port=config.api_port)
