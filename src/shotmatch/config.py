"""
점수 계산 설정: 채널별 가중치, 감쇠 스케일, DTW 윈도우 비율, 임계값
"""

import json
import math
import os
from dataclasses import dataclass, field, fields, replace
from typing import Mapping, Optional

CHANNELS = ("angles", "positions", "proportions", "velocity", "timing")


@dataclass(frozen=True)
class ChannelWeights:
    """Weight of each channel in the final score (must sum to 1.0)."""
    angles: float = 0.20
    positions: float = 0.30  # 몸 형태, 가장 중요
    proportions: float = 0.10
    velocity: float = 0.25
    timing: float = 0.15  # kinetic chain 순서

    def __post_init__(self):
        total = sum(getattr(self, c) for c in CHANNELS)
        if any(getattr(self, c) < 0 for c in CHANNELS):
            raise ValueError("channel weights must be non-negative")
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"channel weights must sum to 1.0, got {total:.6f}")


@dataclass(frozen=True)
class DecayScales:
    """score = 100 * exp(-distance / scale)"""
    angles: float = 25.0
    positions: float = 2.5
    proportions: float = 3.0
    velocity: float = 1.5
    timing: float = 2.0

    def __post_init__(self):
        for c in CHANNELS:
            v = getattr(self, c)
            if not (v > 0 and math.isfinite(v)):
                raise ValueError(f"decay scale for {c} must be positive, got {v!r}")


@dataclass(frozen=True)
class WindowRatios:
    """Sakoe-Chiba band ratio per channel."""
    angles: float = 0.4
    positions: float = 0.4
    proportions: float = 0.4
    velocity: float = 0.4
    timing: float = 0.4

    def __post_init__(self):
        for c in CHANNELS:
            if getattr(self, c) < 0:
                raise ValueError(f"window ratio for {c} must be >= 0")


@dataclass(frozen=True)
class ScoringConfig:
    confidence_threshold: float = 0.3
    min_sequence_length: int = 8
    weights: ChannelWeights = field(default_factory=ChannelWeights)
    decay_scales: DecayScales = field(default_factory=DecayScales)
    window_ratios: WindowRatios = field(default_factory=WindowRatios)

    def __post_init__(self):
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ValueError("confidence_threshold must be in [0, 1]")
        if self.min_sequence_length < 1:
            raise ValueError("min_sequence_length must be >= 1")

    @classmethod
    def from_dict(cls, data: Mapping) -> "ScoringConfig":
        """
        JSON 설정 dict -> ScoringConfig. 빠진 항목은 기본값 사용.
        {"WEIGHTS": {...}, "DECAY_SCALES": {...}, "WINDOW_RATIOS": {...},
         "confidence_threshold": 0.3, "min_sequence_length": 8}
        """
        kwargs = {}
        if "confidence_threshold" in data:
            kwargs["confidence_threshold"] = float(data["confidence_threshold"])
        if "min_sequence_length" in data:
            kwargs["min_sequence_length"] = int(data["min_sequence_length"])
        for key, attr, klass in (
            ("WEIGHTS", "weights", ChannelWeights),
            ("DECAY_SCALES", "decay_scales", DecayScales),
            ("WINDOW_RATIOS", "window_ratios", WindowRatios),
        ):
            section = data.get(key)
            if section:
                kwargs[attr] = _channel_section(klass, section, key)
        return cls(**kwargs)

    def with_window_ratio(self, ratio: float) -> "ScoringConfig":
        """Same config with one window ratio for every channel."""
        return replace(self, window_ratios=WindowRatios(*([ratio] * len(CHANNELS))))


def _channel_section(klass, section: Mapping, key: str):
    names = {f.name for f in fields(klass)}
    unknown = set(section) - names
    if unknown:
        raise ValueError(f"{key}: unknown channel(s) {sorted(unknown)}")
    return klass(**{k: float(v) for k, v in section.items()})


DEFAULT_CONFIG = ScoringConfig()


def load_config(config_path: str, key: Optional[str] = None) -> ScoringConfig:
    """
    JSON 파일에서 설정을 불러온다.
    key가 주어지면 해당 key 아래의 설정 세트만 사용 (예: 레퍼런스 영상 이름).
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"{config_path} not found.")

    with open(config_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if key is not None:
        if key not in data:
            raise KeyError(f"'{key}' not found in {config_path}.")
        data = data[key]

    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: expected a JSON object, got {type(data).__name__}")
    return ScoringConfig.from_dict(data)


def config_key_for_video(ref_video_path: str) -> str:
    """ "data/Pro_Swing.mp4" -> "pro_swing" """
    return os.path.splitext(os.path.basename(ref_video_path))[0].lower()
