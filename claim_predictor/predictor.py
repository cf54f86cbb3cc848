"""
Main entry point for claim lifecycle prediction.

This module provides ClaimLifecyclePredictor and predict_claim_lifecycle,
which combine the deterministic scoring engine with the two LLM-backed
agents into one PredictionOutput. The text-generation client is always
passed in by the caller.
"""

from __future__ import annotations
import logging
from typing import Optional

from .agents.base import TextGenerationClient
from .agents.carrier_behavior import CarrierBehaviorAgent
from .agents.summary import ClaimSummaryAgent
from .engine.confidence import calculate_confidence_score
from .engine.next_move import predict_next_move
from .engine.probability import calculate_probabilities
from .engine.recommendations import generate_recommended_steps
from .engine.risk_flags import generate_risk_flags
from .engine.success_path import success_path
from .models.claim import PredictionInput
from .models.prediction import PredictionOutput
from .utils.bedrock_client import BedrockClient
from .utils.config import Config
from .utils.logging import set_context, with_context

logger = logging.getLogger(__name__)


class ClaimLifecyclePredictor:
    """
    Predicts how a carrier will handle a claim.

    Instances hold no per-claim state; one predictor can serve any number
    of concurrent predict() calls.

    Attributes:
        config: Loaded configuration
        carrier_agent: Agent predicting carrier behavior
        summary_agent: Agent writing the narrative summary
    """

    def __init__(
        self,
        text_client: TextGenerationClient,
        config: Optional[Config] = None
    ):
        """
        Initialize the predictor.

        Args:
            text_client: Client used for both text-generation calls
            config: Configuration; built-in defaults when omitted
        """
        self.config = config or Config.default()
        timeout = self.config.bedrock.timeout

        self.carrier_agent = CarrierBehaviorAgent(
            client=text_client,
            config=self.config.carrier_behavior,
            timeout=timeout,
        )
        self.summary_agent = ClaimSummaryAgent(
            client=text_client,
            config=self.config.summary,
            timeout=timeout,
        )

    @classmethod
    def from_config(cls, config: Config) -> "ClaimLifecyclePredictor":
        """Build a predictor backed by AWS Bedrock."""
        return cls(text_client=BedrockClient.from_config(config), config=config)

    @with_context(component="predictor")
    async def predict(self, prediction_input: PredictionInput) -> PredictionOutput:
        """
        Run a full lifecycle prediction for one claim.

        Never raises for external-call failures; the LLM-backed fields fall
        back to deterministic text instead.

        Args:
            prediction_input: Claim signals

        Returns:
            Complete PredictionOutput
        """
        set_context(claim_id=prediction_input.claim_id, org_id=prediction_input.org_id)
        logger.debug(f"Analyzing claim {prediction_input.claim_id}")

        probabilities = calculate_probabilities(prediction_input)
        risk_flags = generate_risk_flags(prediction_input, probabilities)

        carrier_behavior = await self.carrier_agent.invoke(prediction_input, probabilities)

        recommended_steps = generate_recommended_steps(prediction_input, probabilities, risk_flags)
        confidence_score = calculate_confidence_score(prediction_input, probabilities)

        # Narrative consumes the carrier strategy, so it runs second
        ai_summary = await self.summary_agent.invoke(
            prediction_input, probabilities, carrier_behavior
        )

        next_move = predict_next_move(prediction_input, probabilities)

        logger.info(
            f"Claim {prediction_input.claim_id} predicted: "
            f"full={probabilities.full}, partial={probabilities.partial}, "
            f"deny={probabilities.deny}, confidence={confidence_score}, "
            f"flags={len(risk_flags)}"
        )

        return PredictionOutput(
            probability_full=probabilities.full,
            probability_part=probabilities.partial,
            probability_deny=probabilities.deny,
            confidence_score=confidence_score,
            recommended_steps=recommended_steps,
            risk_flags=risk_flags,
            next_move=next_move,
            ai_summary=ai_summary,
            carrier_behavior=carrier_behavior,
            success_path=success_path(),
        )


async def predict_claim_lifecycle(
    prediction_input: PredictionInput,
    text_client: TextGenerationClient,
    config: Optional[Config] = None
) -> PredictionOutput:
    """
    Predict a claim's lifecycle with a one-off predictor.

    Args:
        prediction_input: Claim signals
        text_client: Client used for the text-generation calls
        config: Optional configuration

    Returns:
        Complete PredictionOutput
    """
    predictor = ClaimLifecyclePredictor(text_client=text_client, config=config)
    return await predictor.predict(prediction_input)
