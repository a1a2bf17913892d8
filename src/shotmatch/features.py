"""
프레임별 특징 추출: 관절 각도, 정규화된 상대 위치, 신체 비율
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .config import DEFAULT_CONFIG, ScoringConfig
from .keypoints import JointName as J, PoseFrame

EPS = 1e-6

# (a, vertex, c): 각도는 vertex에서 측정
ANGLE_TRIPLES = [
    (J.LEFT_SHOULDER, J.LEFT_ELBOW, J.LEFT_WRIST),
    (J.RIGHT_SHOULDER, J.RIGHT_ELBOW, J.RIGHT_WRIST),
    (J.LEFT_HIP, J.LEFT_SHOULDER, J.LEFT_ELBOW),
    (J.RIGHT_HIP, J.RIGHT_SHOULDER, J.RIGHT_ELBOW),
    (J.LEFT_HIP, J.LEFT_KNEE, J.LEFT_ANKLE),
    (J.RIGHT_HIP, J.RIGHT_KNEE, J.RIGHT_ANKLE),
]
ANGLE_NAMES = ["left elbow", "right elbow", "left shoulder", "right shoulder", "left knee", "right knee"]

# 손목, 무릎, 어깨, 골반 순서 (x, y) * 8 = 16
POSITION_JOINTS = [
    J.LEFT_WRIST, J.RIGHT_WRIST,
    J.LEFT_KNEE, J.RIGHT_KNEE,
    J.LEFT_SHOULDER, J.RIGHT_SHOULDER,
    J.LEFT_HIP, J.RIGHT_HIP,
]
TORSO_JOINTS = [J.LEFT_SHOULDER, J.RIGHT_SHOULDER, J.LEFT_HIP, J.RIGHT_HIP]
PROPORTION_JOINTS = TORSO_JOINTS + [J.LEFT_WRIST, J.RIGHT_WRIST]
PROPORTION_NAMES = ["hip/shoulder", "left arm extension", "right arm extension",
                    "left wrist height", "right wrist height"]


@dataclass(frozen=True)
class FeatureBundle:
    angles: np.ndarray       # (6,) degrees
    positions: np.ndarray    # (16,)
    proportions: np.ndarray  # (5,)


def _gather(frame: PoseFrame, joints, threshold):
    """joints 순서대로 (N, 2) 좌표. 하나라도 쓸 수 없으면 None."""
    pts = []
    for j in joints:
        kp = frame.usable(j, threshold)
        if kp is None:
            return None
        pts.append((kp.x, kp.y))
    return np.asarray(pts, dtype=np.float64)


def _dist(a, b):
    return float(np.hypot(a[0] - b[0], a[1] - b[1]))


def _angle(a, b, c):
    ab = a - b
    cb = c - b
    cos = np.dot(ab, cb) / (np.linalg.norm(ab) * np.linalg.norm(cb) + EPS)
    return math.degrees(math.acos(float(np.clip(cos, -1.0, 1.0))))


def extract_angles(frame: PoseFrame, threshold: float = 0.3) -> Optional[np.ndarray]:
    out = []
    for triple in ANGLE_TRIPLES:
        pts = _gather(frame, triple, threshold)
        if pts is None:
            return None
        out.append(_angle(pts[0], pts[1], pts[2]))
    return np.array(out, dtype=np.float64)


def extract_positions(frame: PoseFrame, threshold: float = 0.3) -> Optional[np.ndarray]:
    """
    몸 중심(양 어깨, 양 골반 평균) 기준 상대 좌표를 어깨폭+골반폭으로 나눈 값.
    카메라 거리/위치에는 불변, 몸 방향에는 민감.
    """
    pts = _gather(frame, POSITION_JOINTS, threshold)
    if pts is None:
        return None
    ls, rs, lh, rh = pts[4], pts[5], pts[6], pts[7]
    center = (ls + rs + lh + rh) / 4.0
    scale = _dist(ls, rs) + _dist(lh, rh) + EPS
    return ((pts - center) / scale).reshape(-1)


def extract_proportions(frame: PoseFrame, threshold: float = 0.3) -> Optional[np.ndarray]:
    pts = _gather(frame, PROPORTION_JOINTS, threshold)
    if pts is None:
        return None
    ls, rs, lh, rh, lw, rw = pts
    shoulder_w = _dist(ls, rs)
    hip_w = _dist(lh, rh)
    torso = (_dist(ls, lh) + _dist(rs, rh)) / 2.0
    return np.array([
        hip_w / (shoulder_w + EPS),
        _dist(ls, lw) / (torso + EPS),
        _dist(rs, rw) / (torso + EPS),
        (lw[1] - ls[1]) / (torso + EPS),
        (rw[1] - rs[1]) / (torso + EPS),
    ], dtype=np.float64)


class FeatureExtractor:
    """PoseFrame -> FeatureBundle. 하위 추출기가 하나라도 실패하면 프레임 전체를 버린다."""

    def __init__(self, config: ScoringConfig = DEFAULT_CONFIG):
        self.config = config

    def extract(self, frame: PoseFrame) -> Optional[FeatureBundle]:
        th = self.config.confidence_threshold
        angles = extract_angles(frame, th)
        positions = extract_positions(frame, th)
        proportions = extract_proportions(frame, th)
        if angles is None or positions is None or proportions is None:
            return None
        return FeatureBundle(angles=angles, positions=positions, proportions=proportions)

    __call__ = extract
