"""
키포인트 데이터 모델: 관절 이름, 단일 키포인트, 한 프레임의 포즈
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, Optional, Tuple, Union

from .errors import UnknownJointError


class JointName(str, Enum):
    LEFT_SHOULDER = "left_shoulder"
    RIGHT_SHOULDER = "right_shoulder"
    LEFT_ELBOW = "left_elbow"
    RIGHT_ELBOW = "right_elbow"
    LEFT_WRIST = "left_wrist"
    RIGHT_WRIST = "right_wrist"
    LEFT_HIP = "left_hip"
    RIGHT_HIP = "right_hip"
    LEFT_KNEE = "left_knee"
    RIGHT_KNEE = "right_knee"
    LEFT_ANKLE = "left_ankle"
    RIGHT_ANKLE = "right_ankle"

    @classmethod
    def parse(cls, name: Union["JointName", str]) -> "JointName":
        """Exact-match lookup; anything outside the enumeration is rejected."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            raise UnknownJointError(name) from None


@dataclass(frozen=True)
class Keypoint:
    """단일 키포인트 데이터"""
    joint: JointName
    x: float
    y: float
    confidence: float

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be in [0, 1], got {self.confidence!r}")


KeypointLike = Union[Keypoint, Tuple[float, float, float]]


class PoseFrame(Mapping):
    """
    한 샘플 프레임의 포즈. JointName -> Keypoint 매핑이며 생성 후 변경 불가.
    관절당 키포인트는 최대 하나.
    """

    __slots__ = ("_points",)

    def __init__(self, points: Mapping[JointName, Keypoint]):
        self._points = MappingProxyType(dict(points))

    @classmethod
    def from_keypoints(cls, keypoints: Iterable[Keypoint]) -> "PoseFrame":
        points: Dict[JointName, Keypoint] = {}
        for kp in keypoints:
            joint = JointName.parse(kp.joint)
            if joint in points:
                raise ValueError(f"duplicate keypoint for {joint.value}")
            points[joint] = kp if kp.joint is joint else Keypoint(joint, kp.x, kp.y, kp.confidence)
        return cls(points)

    @classmethod
    def from_mapping(cls, data: Mapping[Union[JointName, str], KeypointLike]) -> "PoseFrame":
        """
        {"left_shoulder": (x, y, confidence), ...} 형태를 PoseFrame으로 변환.
        값은 Keypoint 또는 (x, y, confidence) 튜플.
        """
        points: Dict[JointName, Keypoint] = {}
        for name, value in data.items():
            joint = JointName.parse(name)
            if isinstance(value, Keypoint):
                x, y, conf = value.x, value.y, value.confidence
            else:
                x, y, conf = value
            points[joint] = Keypoint(joint, float(x), float(y), float(conf))
        return cls(points)

    def usable(self, joint: JointName, threshold: float) -> Optional[Keypoint]:
        """Keypoint if present with confidence >= threshold, else None."""
        kp = self._points.get(joint)
        if kp is None or kp.confidence < threshold:
            return None
        return kp

    def transformed(self, scale: float = 1.0, dx: float = 0.0, dy: float = 0.0) -> "PoseFrame":
        """Uniformly scale then shift every point (same pose, different framing)."""
        return PoseFrame({
            j: Keypoint(j, kp.x * scale + dx, kp.y * scale + dy, kp.confidence)
            for j, kp in self._points.items()
        })

    def __getitem__(self, joint):
        try:
            joint = JointName.parse(joint)
        except UnknownJointError:
            raise KeyError(joint) from None
        return self._points[joint]

    def __iter__(self):
        return iter(self._points)

    def __len__(self):
        return len(self._points)

    def __repr__(self):
        return f"PoseFrame({len(self)} joints)"


# MediaPipe BlazePose 33-landmark 인덱스 (얼굴/손/발끝은 사용 안 함)
BLAZEPOSE_INDEX = {
    JointName.LEFT_SHOULDER: 11, JointName.RIGHT_SHOULDER: 12,
    JointName.LEFT_ELBOW: 13, JointName.RIGHT_ELBOW: 14,
    JointName.LEFT_WRIST: 15, JointName.RIGHT_WRIST: 16,
    JointName.LEFT_HIP: 23, JointName.RIGHT_HIP: 24,
    JointName.LEFT_KNEE: 25, JointName.RIGHT_KNEE: 26,
    JointName.LEFT_ANKLE: 27, JointName.RIGHT_ANKLE: 28,
}


def frame_from_landmarks(landmarks, width: float = 1.0, height: float = 1.0) -> PoseFrame:
    """
    (33, >=4) 배열 [x, y, z, visibility] (x, y는 0~1 정규화) -> PoseFrame.
    width/height를 주면 픽셀 좌표로 변환. visibility를 confidence로 사용.
    """
    points = {}
    for joint, idx in BLAZEPOSE_INDEX.items():
        if idx >= len(landmarks):
            continue
        row = landmarks[idx]
        x, y, vis = float(row[0]), float(row[1]), float(row[3])
        if vis != vis:  # NaN
            continue
        points[joint] = Keypoint(joint, x * width, y * height, min(1.0, max(0.0, vis)))
    return PoseFrame(points)
