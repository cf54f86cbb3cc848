"""FastAPI surface for the claim lifecycle predictor."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any, Dict

from fastapi import Body, Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse

from claim_predictor.models.claim import PredictionInput
from claim_predictor.predictor import ClaimLifecyclePredictor
from claim_predictor.utils.config import Config
from claim_predictor.utils.errors import ConfigurationError, ErrorType, InvalidPredictionInputError
from claim_predictor.utils.logging import setup_logging


APP_TITLE = "Claim Lifecycle Predictor"
CONFIG_PATH = os.getenv("CLAIM_PREDICTOR_CONFIG", "config.yaml")

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _load_config() -> Config:
    try:
        config = Config.load(CONFIG_PATH)
    except ConfigurationError as exc:
        if exc.context.error_type is not ErrorType.CONFIG_MISSING:
            raise
        logger.warning(f"{exc}; using built-in defaults")
        config = Config.default()

    setup_logging(
        level=config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.file or None,
    )
    return config


@lru_cache(maxsize=1)
def get_predictor() -> ClaimLifecyclePredictor:
    """Shared predictor; overridden in tests through app.dependency_overrides."""
    return ClaimLifecyclePredictor.from_config(_load_config())


app = FastAPI(title=APP_TITLE)


@app.post("/api/claims/{claim_id}/predict")
async def predict_claim(
    claim_id: str,
    payload: Dict[str, Any] = Body(...),
    predictor: ClaimLifecyclePredictor = Depends(get_predictor),
) -> JSONResponse:
    body = dict(payload)
    body["claimId"] = claim_id

    try:
        prediction_input = PredictionInput.from_dict(body)
    except InvalidPredictionInputError as exc:
        logger.info(f"Rejected prediction request for {claim_id}: {exc}")
        raise HTTPException(status_code=400, detail=exc.to_dict()) from exc

    prediction = await predictor.predict(prediction_input)

    return JSONResponse({
        "success": True,
        "prediction": prediction.to_dict(),
        "claimId": claim_id,
    })


@app.get("/healthz")
async def healthcheck() -> Dict[str, str]:
    return {"status": "ok"}
