"""Tests for the LLM-backed carrier behavior and summary agents."""

import json

import pytest

from claim_predictor.agents import (
    CarrierBehaviorAgent,
    ClaimSummaryAgent,
    FALLBACK_BEHAVIOR,
    templated_summary,
)
from claim_predictor.models.claim import StormImpact
from claim_predictor.models.prediction import CarrierBehavior, Probabilities
from claim_predictor.utils.config import Config
from claim_predictor.utils.errors import BedrockAPIError, ErrorContext, ErrorType
from claim_predictor.utils.response_formatter import ResponseFormatter
from conftest import FailingTextClient, FakeTextClient, HangingTextClient, make_input

PROBABILITIES = Probabilities(full=57, partial=29, deny=14)
RISKY = Probabilities(full=20, partial=25, deny=55)


def _carrier_agent(client, timeout=1.0):
    return CarrierBehaviorAgent(client=client, config=Config.default().carrier_behavior, timeout=timeout)


def _summary_agent(client, timeout=1.0):
    return ClaimSummaryAgent(client=client, config=Config.default().summary, timeout=timeout)


class TestCarrierBehaviorAgent:
    @pytest.mark.asyncio
    async def test_parses_json_reply(self):
        reply = json.dumps({
            "likelyStrategy": "Carrier will challenge causation.",
            "commonTactics": ["Send engineer", "Cite wear and tear", "Delay inspection", "Extra"],
            "timeline": "Expect a response within 30 days.",
        })
        behavior = await _carrier_agent(FakeTextClient(reply)).invoke(make_input(), PROBABILITIES)

        assert behavior == CarrierBehavior(
            likely_strategy="Carrier will challenge causation.",
            common_tactics=("Send engineer", "Cite wear and tear", "Delay inspection"),
            timeline="Expect a response within 30 days.",
        )

    @pytest.mark.asyncio
    async def test_parses_fenced_json_reply(self):
        reply = (
            "Here is my prediction:\n```json\n"
            '{"likelyStrategy": "Partial approval.", "commonTactics": ["Depreciate"], "timeline": "2 weeks"}'
            "\n```"
        )
        behavior = await _carrier_agent(FakeTextClient(reply)).invoke(make_input(), PROBABILITIES)
        assert behavior.likely_strategy == "Partial approval."
        assert behavior.common_tactics == ("Depreciate",)

    @pytest.mark.asyncio
    async def test_falls_back_to_line_parsing(self):
        reply = (
            "The carrier will dispute storm proximity.\n\n"
            "- Request a re-inspection\n"
            "- Question hail size\n"
            "- Offer repair instead of replacement\n"
            "- Lowball material costs\n"
            "Expect an answer in 3 weeks."
        )
        behavior = await _carrier_agent(FakeTextClient(reply)).invoke(make_input(), PROBABILITIES)

        assert behavior.likely_strategy == "The carrier will dispute storm proximity."
        assert behavior.common_tactics == (
            "- Request a re-inspection",
            "- Question hail size",
            "- Offer repair instead of replacement",
        )
        assert behavior.timeline == "Expect an answer in 3 weeks."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("client", [
        FailingTextClient(),
        FailingTextClient(BedrockAPIError(ErrorContext(
            error_type=ErrorType.BEDROCK_RATE_LIMIT, message="throttled", recoverable=False
        ))),
        FakeTextClient(""),
        FakeTextClient("   \n  "),
        FakeTextClient('{"likelyStrategy": 42, "commonTactics": [], "timeline": "t"}'),
        FakeTextClient('{"strategy": "Deny", "commonTactics": ["a"], "timeline": "t"}'),
        FakeTextClient('{"likelyStrategy": "Deny", "commonTactics": "delay", "timeline": "t"}'),
        FakeTextClient('Prediction:\n```json\n{"likelyStrategy": ""}\n```'),
    ])
    async def test_failures_return_fallback(self, client):
        behavior = await _carrier_agent(client).invoke(make_input(), PROBABILITIES)
        assert behavior is FALLBACK_BEHAVIOR
        assert len(behavior.common_tactics) == 3

    @pytest.mark.asyncio
    async def test_timeout_returns_fallback(self):
        agent = _carrier_agent(HangingTextClient(), timeout=0.05)
        assert await agent.invoke(make_input(), PROBABILITIES) is FALLBACK_BEHAVIOR

    def test_prompt_embeds_metrics(self):
        claim = make_input(
            storm_impact=StormImpact(hail_size=1.75, wind_speed=65),
            photo_count=12,
            has_video=True,
        )
        prompt = _carrier_agent(FakeTextClient()).build_prompt(claim, PROBABILITIES)

        assert "Hail: 1.75 inches" in prompt
        assert "Wind: 65 mph" in prompt
        assert "Distance: unknown miles" in prompt
        assert "Photos: 12" in prompt
        assert "Video: Yes" in prompt
        assert "Full Approval: 57%" in prompt

    @pytest.mark.asyncio
    async def test_uses_configured_model_settings(self):
        client = FakeTextClient('{"likelyStrategy": "Approve."}')
        await _carrier_agent(client).invoke(make_input(), PROBABILITIES)

        call = client.calls[0]
        config = Config.default().carrier_behavior
        assert call["model_id"] == config.model_id
        assert call["max_tokens"] == 500
        assert call["system_prompt"] == config.instructions


class TestClaimSummaryAgent:
    @pytest.mark.asyncio
    async def test_returns_model_text(self):
        client = FakeTextClient("  The carrier will likely approve the claim.  ")
        summary = await _summary_agent(client).invoke(make_input(), PROBABILITIES, FALLBACK_BEHAVIOR)

        assert summary == "The carrier will likely approve the claim."
        assert FALLBACK_BEHAVIOR.likely_strategy in client.calls[0]["user_prompt"]

    @pytest.mark.asyncio
    async def test_error_uses_template(self):
        summary = await _summary_agent(FailingTextClient()).invoke(
            make_input(), PROBABILITIES, FALLBACK_BEHAVIOR
        )
        assert summary == (
            "Based on current data, the claim has a 57% chance of full approval. "
            "Strong approval indicators present."
        )

    @pytest.mark.asyncio
    async def test_empty_reply_uses_template_with_denial_warning(self):
        summary = await _summary_agent(FakeTextClient("")).invoke(make_input(), RISKY, FALLBACK_BEHAVIOR)
        assert summary == templated_summary(RISKY)
        assert "High denial risk detected" in summary

    @pytest.mark.asyncio
    async def test_timeout_uses_template(self):
        agent = _summary_agent(HangingTextClient(), timeout=0.05)
        summary = await agent.invoke(make_input(), PROBABILITIES, FALLBACK_BEHAVIOR)
        assert summary == templated_summary(PROBABILITIES)


class TestResponseFormatter:
    def test_embedded_object_with_braces_in_strings(self):
        text = 'Prediction follows {"likelyStrategy": "Deny {maybe}", "timeline": "soon"} end'
        assert ResponseFormatter.extract_json_from_response(text) == {
            "likelyStrategy": "Deny {maybe}",
            "timeline": "soon",
        }

    def test_skips_unparseable_object(self):
        text = '{not json} then {"likelyStrategy": "ok"}'
        assert ResponseFormatter.extract_json_from_response(text) == {"likelyStrategy": "ok"}

    def test_non_object_json_is_ignored(self):
        assert ResponseFormatter.extract_json_from_response('["a", "b"]') is None
        assert ResponseFormatter.extract_json_from_response("") is None

    def test_validate_json_structure(self):
        assert ResponseFormatter.validate_json_structure({"a": 1}, ["a"])
        assert not ResponseFormatter.validate_json_structure({"a": 1}, ["b"])
        assert not ResponseFormatter.validate_json_structure(None)
