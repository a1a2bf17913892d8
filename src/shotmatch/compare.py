"""
다중 지표 비교: 각도 / 위치 / 비율 / 속도 / 타이밍 다섯 채널을 DTW로 각각 정렬
"""

import logging
import math
from dataclasses import asdict, dataclass
from typing import Callable, Iterable, List, Optional, Sequence

from .config import CHANNELS, DEFAULT_CONFIG, ScoringConfig
from .dtw import align
from .errors import InsufficientSequenceError
from .features import FeatureBundle, FeatureExtractor
from .keypoints import PoseFrame
from .scoring import ScoreCombiner, ScoreResult
from .temporal import timing_vectors, velocities

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DistanceSet:
    angles: float = 0.0
    positions: float = 0.0
    proportions: float = 0.0
    velocity: float = 0.0
    timing: float = 0.0

    def as_dict(self):
        return asdict(self)


def build_sequence(frames: Iterable[PoseFrame],
                   extractor: Optional[Callable[[PoseFrame], Optional[FeatureBundle]]] = None
                   ) -> List[FeatureBundle]:
    """Extract every frame in order, dropping frames with an unusable joint."""
    if extractor is None:
        extractor = FeatureExtractor()
    seq, dropped = [], 0
    for frame in frames:
        bundle = extractor(frame)
        if bundle is None:
            dropped += 1
            continue
        seq.append(bundle)
    if dropped:
        logger.debug("dropped %d frame(s) with missing joints, kept %d", dropped, len(seq))
    return seq


def has_enough_frames(seq: Sequence, minimum: int = DEFAULT_CONFIG.min_sequence_length) -> bool:
    return len(seq) >= minimum


def check_sequence_length(seq: Sequence,
                          minimum: int = DEFAULT_CONFIG.min_sequence_length,
                          label: str = "sequence") -> None:
    if not has_enough_frames(seq, minimum):
        raise InsufficientSequenceError(label, len(seq), minimum)


class MultiMetricComparator:
    """
    user/pro 시퀀스를 다섯 채널로 비교해 DistanceSet을 만든다.
    시퀀스 길이 검사는 호출자 책임 (check_sequence_length).
    """

    def __init__(self, config: ScoringConfig = DEFAULT_CONFIG):
        self.config = config

    def _channel_inputs(self, channel, seq):
        if channel == "velocity":
            return velocities(seq)
        if channel == "timing":
            return timing_vectors(seq)
        return [getattr(f, channel) for f in seq]

    def _channel_distance(self, channel, user_seq, pro_seq) -> float:
        ratio = getattr(self.config.window_ratios, channel)
        # 한 채널의 실패가 나머지 채널을 막지 않도록 0으로 대체
        try:
            d = align(self._channel_inputs(channel, user_seq),
                      self._channel_inputs(channel, pro_seq), ratio)
        except (ValueError, ArithmeticError, IndexError) as e:
            logger.warning("channel %s failed (%s); scoring it as distance 0", channel, e)
            return 0.0
        if not math.isfinite(d):
            logger.warning("channel %s produced non-finite distance %r; scoring it as distance 0", channel, d)
            return 0.0
        return d

    def compare(self, user_seq: Sequence[FeatureBundle], pro_seq: Sequence[FeatureBundle]) -> DistanceSet:
        dists = {c: self._channel_distance(c, user_seq, pro_seq) for c in CHANNELS}
        logger.debug("channel distances: %s", {c: round(d, 4) for c, d in dists.items()})
        return DistanceSet(**dists)

    __call__ = compare


def compare_sequences(user_seq, pro_seq, config: ScoringConfig = DEFAULT_CONFIG) -> ScoreResult:
    """Length check, multi-metric comparison and score combination for two built sequences."""
    check_sequence_length(pro_seq, config.min_sequence_length, label="pro")
    check_sequence_length(user_seq, config.min_sequence_length, label="user")
    distances = MultiMetricComparator(config).compare(user_seq, pro_seq)
    return ScoreCombiner(config).combine(distances)


def compare_performances(user_frames: Iterable[PoseFrame],
                         pro_frames: Iterable[PoseFrame],
                         config: ScoringConfig = DEFAULT_CONFIG) -> ScoreResult:
    """PoseFrame 리스트 두 개 -> 최종 점수. 유효 프레임이 부족하면 InsufficientSequenceError."""
    extractor = FeatureExtractor(config)
    pro_seq = build_sequence(pro_frames, extractor)
    user_seq = build_sequence(user_frames, extractor)
    return compare_sequences(user_seq, pro_seq, config)
