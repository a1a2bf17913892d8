"""
채널별 거리 -> 유사도 점수(0~100) 변환 및 가중 합산
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .config import CHANNELS, DEFAULT_CONFIG, ScoringConfig

# compareSequences 스타일 키 ("anglesDist" 등)도 허용
_LEGACY_KEYS = {f"{c}Dist": c for c in CHANNELS}


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def decay_score(distance: Optional[float], scale: float) -> float:
    """100 * exp(-d / scale). A missing distance counts as 0 (score 100)."""
    if distance is None:
        distance = 0.0
    try:
        return 100.0 * math.exp(-distance / scale)
    except OverflowError:
        return math.inf


@dataclass(frozen=True)
class ScoreResult:
    final: int
    breakdown: Mapping[str, int]

    def __post_init__(self):
        object.__setattr__(self, "breakdown", MappingProxyType(dict(self.breakdown)))

    def to_dict(self):
        return {"final": self.final, "breakdown": {c: self.breakdown[c] for c in CHANNELS}}

    def summary(self) -> str:
        b = self.breakdown
        return (f"Score: {self.final} | Angles:{b['angles']} Pos:{b['positions']} "
                f"Vel:{b['velocity']} Time:{b['timing']} Props:{b['proportions']}")


def _distance_map(distances) -> Mapping[str, Optional[float]]:
    if hasattr(distances, "as_dict"):
        return distances.as_dict()
    out = {}
    for key, value in distances.items():
        out[_LEGACY_KEYS.get(key, key)] = value
    return out


class ScoreCombiner:
    def __init__(self, config: ScoringConfig = DEFAULT_CONFIG):
        self.config = config

    def channel_scores(self, distances) -> dict:
        dist = _distance_map(distances)
        scales = self.config.decay_scales
        return {c: decay_score(dist.get(c), getattr(scales, c)) for c in CHANNELS}

    def combine(self, distances: Union[Mapping, object]) -> ScoreResult:
        """
        가중 평균으로 최종 점수 계산.
        NaN/inf가 합산까지 오면 최종 점수는 0.
        """
        scores = self.channel_scores(distances)
        weights = self.config.weights
        total = sum(scores[c] * getattr(weights, c) for c in CHANNELS)

        if not math.isfinite(total):
            final = 0
        else:
            final = min(100, max(0, round_half_up(total)))

        breakdown = {c: round_half_up(s) if math.isfinite(s) else 0 for c, s in scores.items()}
        return ScoreResult(final=final, breakdown=breakdown)

    __call__ = combine
