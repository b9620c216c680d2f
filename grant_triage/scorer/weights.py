"""Match-score weight configuration.

Defaults reproduce the published scoring formula; alternative weights can be
loaded from JSON or YAML for experimentation.
"""

from typing import Optional

from pydantic import BaseModel, field_validator

from ..datafiles import read_data_file, write_data_file


class ScoringWeights(BaseModel):
    """Weights for the two match-score dimensions.

    ``cost_coverage`` and ``aid_intensity`` must sum to 1.0. Matched category
    counts are divided by ``category_norm`` before weighting.
    """

    cost_coverage: float = 0.5
    aid_intensity: float = 0.5
    category_norm: int = 10
    version: str = "1.0"

    @field_validator('cost_coverage', 'aid_intensity')
    @classmethod
    def within_unit_interval(cls, v: float) -> float:
        if not 0 <= v <= 1:
            raise ValueError(f"Weight must be between 0 and 1, got {v}")
        return v

    @field_validator('category_norm')
    @classmethod
    def positive_norm(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"category_norm must be positive, got {v}")
        return v

    def model_post_init(self, __context) -> None:
        total = self.cost_coverage + self.aid_intensity
        if abs(total - 1.0) > 0.001:
            raise ValueError(
                f"Weights must sum to 1.0, got {total:.3f} "
                f"(coverage={self.cost_coverage}, intensity={self.aid_intensity})"
            )

    def to_dict(self) -> dict:
        return self.model_dump()


DEFAULT_WEIGHTS = ScoringWeights()


def load_weights(filepath: Optional[str] = None) -> ScoringWeights:
    """Load scoring weights from a JSON/YAML file, or the defaults when no path is given.

    Raises:
        FileNotFoundError: If filepath provided but doesn't exist
        ValueError: If the format is unsupported or the weights are invalid
    """
    if not filepath:
        return DEFAULT_WEIGHTS
    return ScoringWeights(**read_data_file(filepath, "Weights"))


def save_weights(weights: ScoringWeights, filepath: str) -> None:
    write_data_file(weights.to_dict(), filepath)


# Alternative weightings

GENEROSITY_FOCUSED = ScoringWeights(
    cost_coverage=0.3,
    aid_intensity=0.7,
    version="generosity_focused_1.0",
)

COVERAGE_FOCUSED = ScoringWeights(
    cost_coverage=0.7,
    aid_intensity=0.3,
    version="coverage_focused_1.0",
)
