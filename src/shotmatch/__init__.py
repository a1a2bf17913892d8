"""
shotmatch - 포즈 시퀀스 비교 모듈
레퍼런스(pro)와 사용자 동작을 다중 지표 DTW로 비교해 0~100 점수를 만든다.
"""

__version__ = "0.1.0"

from .config import (
    CHANNELS, DEFAULT_CONFIG,
    ChannelWeights, DecayScales, WindowRatios, ScoringConfig,
    load_config, config_key_for_video
)
from .errors import ShotMatchError, UnknownJointError, InsufficientSequenceError
from .keypoints import JointName, Keypoint, PoseFrame, frame_from_landmarks
from .features import (
    FeatureBundle, FeatureExtractor,
    extract_angles, extract_positions, extract_proportions
)
from .temporal import velocities, timing_vectors
from .dtw import align, SequenceAligner
from .scoring import ScoreCombiner, ScoreResult
from .compare import (
    DistanceSet, MultiMetricComparator,
    build_sequence, has_enough_frames, check_sequence_length,
    compare_sequences, compare_performances
)


# mediapipe / opencv 의존 모듈은 필요할 때만 import
def __getattr__(name):
    if name == "PoseExtractor":
        from .extractor import PoseExtractor
        return PoseExtractor
    elif name == "sample_sequence":
        from .video import sample_sequence
        return sample_sequence
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'CHANNELS',
    'DEFAULT_CONFIG',
    'ChannelWeights',
    'DecayScales',
    'WindowRatios',
    'ScoringConfig',
    'load_config',
    'config_key_for_video',
    'ShotMatchError',
    'UnknownJointError',
    'InsufficientSequenceError',
    'JointName',
    'Keypoint',
    'PoseFrame',
    'frame_from_landmarks',
    'FeatureBundle',
    'FeatureExtractor',
    'extract_angles',
    'extract_positions',
    'extract_proportions',
    'velocities',
    'timing_vectors',
    'align',
    'SequenceAligner',
    'ScoreCombiner',
    'ScoreResult',
    'DistanceSet',
    'MultiMetricComparator',
    'build_sequence',
    'has_enough_frames',
    'check_sequence_length',
    'compare_sequences',
    'compare_performances',
    'PoseExtractor',
    'sample_sequence',
    '__version__',
]
