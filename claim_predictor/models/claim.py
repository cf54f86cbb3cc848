"""Claim prediction input data models."""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Any, FrozenSet, Iterable, List, Mapping, Optional

from ..utils.errors import InvalidPredictionInputError

logger = logging.getLogger(__name__)


class DamageFlag(Enum):
    """Damage-analysis flags that move the probability distribution."""
    COMPREHENSIVE_DAMAGE = "comprehensive_damage"
    MINIMAL_DAMAGE = "minimal_damage"
    MISSING_DOCUMENTATION = "missing_documentation"

    @classmethod
    def parse_many(cls, tokens: Iterable[Any]) -> FrozenSet["DamageFlag"]:
        """
        Convert free-text flag tokens to DamageFlag members.

        Matching is exact on the token value. Tokens that are not scoring
        flags are dropped.
        """
        flags = set()
        for token in tokens:
            if isinstance(token, cls):
                flags.add(token)
                continue
            try:
                flags.add(cls(token))
            except ValueError:
                logger.debug(f"Ignoring non-scoring damage flag: {token!r}")
        return frozenset(flags)


def _optional_number(data: Mapping[str, Any], key: str) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidPredictionInputError.invalid_field(key, value, "expected a number")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidPredictionInputError.invalid_field(key, value, "must be finite")
    return value


def _optional_count(data: Mapping[str, Any], key: str) -> Optional[int]:
    value = _optional_number(data, key)
    if value is None:
        return None
    if value < 0 or not value.is_integer():
        raise InvalidPredictionInputError.invalid_field(
            key, data.get(key), "expected a non-negative integer"
        )
    return int(value)


def _optional_bool(data: Mapping[str, Any], key: str) -> Optional[bool]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise InvalidPredictionInputError.invalid_field(key, value, "expected true or false")
    return value


def _optional_str(data: Mapping[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidPredictionInputError.invalid_field(key, value, "expected a string")
    return value


def _list(data: Mapping[str, Any], key: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise InvalidPredictionInputError.invalid_field(key, value, "expected a list")
    return list(value)


def _mapping(data: Mapping[str, Any], key: str) -> Optional[Mapping[str, Any]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise InvalidPredictionInputError.invalid_field(key, value, "expected an object")
    return value


@dataclass(frozen=True)
class DominusAnalysis:
    """
    Output of the AI damage-assessment step.

    Attributes:
        damage_type: Free-text damage category
        urgency: Urgency label ("critical", "high", ...)
        materials: Detected roofing materials (not scored)
        flags: Scoring flags raised by the analysis
    """
    damage_type: Optional[str] = None
    urgency: Optional[str] = None
    materials: List[Any] = field(default_factory=list)
    flags: FrozenSet[DamageFlag] = frozenset()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DominusAnalysis":
        return cls(
            damage_type=_optional_str(data, "damageType"),
            urgency=_optional_str(data, "urgency"),
            materials=_list(data, "materials"),
            flags=DamageFlag.parse_many(_list(data, "flags")),
        )

    def has_flag(self, flag: DamageFlag) -> bool:
        return flag in self.flags


@dataclass(frozen=True)
class StormImpact:
    """
    Storm metrics correlated with the property.

    Every metric is optional; a missing metric contributes nothing.

    Attributes:
        hail_size: Hail diameter in inches
        wind_speed: Peak wind speed in mph
        distance: Miles from storm center to the property
        severity_score: 0-10 composite severity
    """
    hail_size: Optional[float] = None
    wind_speed: Optional[float] = None
    distance: Optional[float] = None
    severity_score: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StormImpact":
        return cls(
            hail_size=_optional_number(data, "hailSize"),
            wind_speed=_optional_number(data, "windSpeed"),
            distance=_optional_number(data, "distance"),
            severity_score=_optional_number(data, "severityScore"),
        )


@dataclass(frozen=True)
class PredictionInput:
    """
    Signals gathered for one claim prediction.

    Attributes:
        claim_id: Claim identifier
        org_id: Owning organization identifier
        lead_id: Optional originating lead
        stage: Optional workflow stage label
        dominus_analysis: Optional AI damage analysis
        storm_impact: Optional storm correlation metrics
        photo_count: Number of uploaded photos
        has_video: Whether a video walkthrough exists (None when unknown)
        has_denial_letter: Whether the carrier already issued a denial
        days_since_creation: Age of the claim in days
        timeline_events: Timeline labels, accepted but not scored
    """
    claim_id: str
    org_id: str
    lead_id: Optional[str] = None
    stage: Optional[str] = None
    dominus_analysis: Optional[DominusAnalysis] = None
    storm_impact: Optional[StormImpact] = None
    photo_count: Optional[int] = None
    has_video: Optional[bool] = None
    has_denial_letter: Optional[bool] = None
    days_since_creation: Optional[int] = None
    timeline_events: List[str] = field(default_factory=list)

    def __post_init__(self):
        for name, wire_name in (("claim_id", "claimId"), ("org_id", "orgId")):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise InvalidPredictionInputError.invalid_field(
                    wire_name, value, "required non-empty string"
                )
        for name, wire_name in (
            ("photo_count", "photoCount"),
            ("days_since_creation", "daysSinceCreation"),
        ):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidPredictionInputError.invalid_field(
                    wire_name, value, "expected a non-negative integer"
                )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PredictionInput":
        """
        Build an input from the camelCase payload used on the wire.

        Args:
            data: Payload such as ``{"claimId": ..., "stormImpact": {...}}``

        Returns:
            Validated PredictionInput

        Raises:
            InvalidPredictionInputError: If any field fails validation
        """
        if not isinstance(data, Mapping):
            raise InvalidPredictionInputError.invalid_field("body", data, "expected an object")

        dominus = _mapping(data, "dominusAnalysis")
        storm = _mapping(data, "stormImpact")
        events = _list(data, "timelineEvents")

        return cls(
            claim_id=data.get("claimId"),
            org_id=data.get("orgId"),
            lead_id=_optional_str(data, "leadId"),
            stage=_optional_str(data, "stage"),
            dominus_analysis=DominusAnalysis.from_dict(dominus) if dominus is not None else None,
            storm_impact=StormImpact.from_dict(storm) if storm is not None else None,
            photo_count=_optional_count(data, "photoCount"),
            has_video=_optional_bool(data, "hasVideo"),
            has_denial_letter=_optional_bool(data, "hasDenialLetter"),
            days_since_creation=_optional_count(data, "daysSinceCreation"),
            timeline_events=[str(event) for event in events],
        )

    def has_damage_flag(self, flag: DamageFlag) -> bool:
        return self.dominus_analysis is not None and self.dominus_analysis.has_flag(flag)

    @property
    def storm_distance(self) -> Optional[float]:
        return self.storm_impact.distance if self.storm_impact else None

    @property
    def hail_size(self) -> Optional[float]:
        return self.storm_impact.hail_size if self.storm_impact else None

