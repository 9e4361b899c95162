"""
Type definitions for the linking engine.

Scoring parameters and the safety band categories used when presenting
a product's score.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class SafetyBand(Enum):
    """Safety score categories."""
    GOOD = "good"  # >= 80
    MODERATE = "moderate"  # >= 60
    POOR = "poor"  # < 60


@dataclass(frozen=True)
class ScoringConfig:
    """Parameters of the safety score formula."""
    organic_clean: int = 100
    conventional_clean: int = 85
    organic_base: int = 70
    conventional_base: int = 60
    penalty_per_chemical: int = 10

    # Band thresholds
    good_threshold: int = 80
    moderate_threshold: int = 60

    def __post_init__(self):
        """
        Validate every parameter stays inside [0, 100] and that a product
        with harmful chemicals never outscores a clean one.
        """
        for name in ("organic_clean", "conventional_clean", "organic_base",
                     "conventional_base", "penalty_per_chemical",
                     "good_threshold", "moderate_threshold"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} must be between 0 and 100, got {value}")
        if self.organic_base > self.organic_clean:
            raise ValueError("organic_base must not exceed organic_clean")
        if self.conventional_base > self.conventional_clean:
            raise ValueError("conventional_base must not exceed conventional_clean")
        if self.moderate_threshold > self.good_threshold:
            raise ValueError("moderate_threshold must not exceed good_threshold")

    def band(self, score: int) -> SafetyBand:
        """Get the safety band for a score."""
        if score >= self.good_threshold:
            return SafetyBand.GOOD
        elif score >= self.moderate_threshold:
            return SafetyBand.MODERATE
        else:
            return SafetyBand.POOR

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]]) -> "ScoringConfig":
        """
        Build from a ConfigManager dictionary.

        Reads the ``scoring`` and ``bands`` sections; missing keys keep
        their defaults.
        """
        if not config:
            return cls()
        scoring = config.get("scoring", {}) or {}
        bands = config.get("bands", {}) or {}
        kwargs = {k: int(v) for k, v in scoring.items() if k in cls.__dataclass_fields__}
        if "good" in bands:
            kwargs["good_threshold"] = int(bands["good"])
        if "moderate" in bands:
            kwargs["moderate_threshold"] = int(bands["moderate"])
        return cls(**kwargs)
