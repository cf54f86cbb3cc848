"""Prediction output data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class Priority(Enum):
    """Urgency of a recommended step."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Probabilities:
    """
    Outcome distribution for a claim, in whole percentage points.

    Attributes:
        full: Chance of full approval
        partial: Chance of partial approval
        deny: Chance of denial
    """
    full: int
    partial: int
    deny: int

    @property
    def maximum(self) -> int:
        return max(self.full, self.partial, self.deny)

    def is_valid(self) -> bool:
        values = (self.full, self.partial, self.deny)
        return all(0 <= value <= 100 for value in values) and sum(values) == 100


@dataclass(frozen=True)
class RecommendedStep:
    """
    An action the contractor should take next.

    Attributes:
        title: Short imperative title
        description: What to do
        priority: How urgent the step is
        reasoning: Why the step was recommended
    """
    title: str
    description: str
    priority: Priority
    reasoning: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "reasoning": self.reasoning,
        }


@dataclass(frozen=True)
class CarrierBehavior:
    """
    Predicted carrier posture.

    Attributes:
        likely_strategy: One or two sentences on the carrier's approach
        common_tactics: Tactics the carrier is expected to use
        timeline: Expected response timeline
    """
    likely_strategy: str
    common_tactics: Tuple[str, ...]
    timeline: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "likelyStrategy": self.likely_strategy,
            "commonTactics": list(self.common_tactics),
            "timeline": self.timeline,
        }


@dataclass(frozen=True)
class SuccessPathStep:
    """One step of the claim success playbook."""
    step: int
    action: str
    do_this: str
    dont_do_this: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step": self.step,
            "action": self.action,
            "doThis": self.do_this,
            "dontDoThis": self.dont_do_this,
        }


@dataclass
class PredictionOutput:
    """
    Complete lifecycle prediction for one claim.

    Attributes:
        probability_full: Percent chance of full approval
        probability_part: Percent chance of partial approval
        probability_deny: Percent chance of denial
        confidence_score: How much evidence backs the prediction (0-100)
        recommended_steps: Prioritized actions, in evaluation order
        risk_flags: Warnings, in evaluation order
        next_move: Most likely carrier action
        ai_summary: Short narrative of the prediction
        carrier_behavior: Predicted carrier strategy
        success_path: Static six-step playbook
    """
    probability_full: int
    probability_part: int
    probability_deny: int
    confidence_score: int
    recommended_steps: List[RecommendedStep] = field(default_factory=list)
    risk_flags: List[str] = field(default_factory=list)
    next_move: str = ""
    ai_summary: str = ""
    carrier_behavior: Optional[CarrierBehavior] = None
    success_path: List[SuccessPathStep] = field(default_factory=list)

    @property
    def probabilities(self) -> Probabilities:
        return Probabilities(
            full=self.probability_full,
            partial=self.probability_part,
            deny=self.probability_deny,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase keys the claim UI consumes."""
        return {
            "probabilityFull": self.probability_full,
            "probabilityPart": self.probability_part,
            "probabilityDeny": self.probability_deny,
            "confidenceScore": self.confidence_score,
            "recommendedSteps": [step.to_dict() for step in self.recommended_steps],
            "riskFlags": list(self.risk_flags),
            "nextMove": self.next_move,
            "aiSummary": self.ai_summary,
            "carrierBehavior": self.carrier_behavior.to_dict() if self.carrier_behavior else None,
            "successPath": [step.to_dict() for step in self.success_path],
        }
