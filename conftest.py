"""Shared fixtures: fake text-generation clients and input builders."""

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from claim_predictor.models.claim import PredictionInput
from claim_predictor.utils.config import Config


class FakeTextClient:
    """Returns canned replies in order and records every call."""

    def __init__(self, *replies: str):
        self.replies: List[str] = list(replies)
        self.calls: List[Dict[str, Any]] = []

    async def generate_text(self, system_prompt, user_prompt, model_id,
                            temperature=0.7, max_tokens=500):
        self.calls.append({
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "model_id": model_id,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        return self.replies.pop(0) if self.replies else ""


class FailingTextClient:
    """Raises on every call."""

    def __init__(self, error: Optional[Exception] = None):
        self.error = error or ConnectionError("network unreachable")
        self.calls = 0

    async def generate_text(self, *args, **kwargs):
        self.calls += 1
        raise self.error


class HangingTextClient:
    """Never answers within any reasonable timeout."""

    async def generate_text(self, *args, **kwargs):
        await asyncio.sleep(60)
        return "too late"


@pytest.fixture
def fast_config() -> Config:
    config = Config.default()
    config.bedrock.timeout = 0.05
    return config


def make_input(**overrides) -> PredictionInput:
    fields = {"claim_id": "CLM-1001", "org_id": "org_roofing"}
    fields.update(overrides)
    return PredictionInput(**fields)
