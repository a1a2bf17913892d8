"""
영상 샘플링: 클립 전체에서 균등 간격으로 약 take개 프레임을 뽑아 포즈 시퀀스를 만든다
"""

import logging
from typing import Callable, Iterator, List, Optional, Tuple

import cv2

from .compare import build_sequence
from .features import FeatureBundle, FeatureExtractor
from .keypoints import PoseFrame

logger = logging.getLogger(__name__)

DEFAULT_TAKE = 90


def read_frame_at(cap, target_idx, current_idx):
    """
    Try to advance to target_idx. If target is behind or far ahead, perform a seek.
    Returns (ok, frame, new_current_idx)
    """
    if target_idx < 0:
        target_idx = 0
    if target_idx < current_idx or (target_idx - current_idx) > 5:
        cap.set(cv2.CAP_PROP_POS_FRAMES, target_idx)
        ok, frame = cap.read()
        return ok, frame, target_idx + 1
    while current_idx < target_idx:
        ok = cap.grab()
        if not ok:
            return False, None, current_idx
        current_idx += 1
    ok, frame = cap.read()
    return ok, frame, current_idx + 1


def sample_indices(total_frames: int, take: int = DEFAULT_TAKE) -> range:
    total = max(1, int(total_frames))
    step = max(1, total // max(1, take))
    return range(0, total, step)


def sample_frames(cap, take: int = DEFAULT_TAKE) -> Iterator[Tuple[int, object]]:
    """Yield (frame_index, bgr) for evenly spaced frames; stops at the first unreadable one."""
    total = int(cap.get(cv2.CAP_PROP_FRAME_COUNT) or 0)
    current = 0
    for idx in sample_indices(total, take):
        ok, frame, current = read_frame_at(cap, idx, current)
        if not ok:
            break
        yield idx, frame


def sample_pose_frames(video_path: str,
                       estimate: Callable[[object], Optional[PoseFrame]],
                       take: int = DEFAULT_TAKE) -> List[PoseFrame]:
    cap = cv2.VideoCapture(video_path)
    if not cap.isOpened():
        raise FileNotFoundError(f"cannot open video: {video_path}")
    poses = []
    try:
        for _, frame in sample_frames(cap, take):
            pose = estimate(frame)
            if pose is not None:
                poses.append(pose)
    finally:
        cap.release()
    logger.info("%s: %d frame(s) with a detected pose", video_path, len(poses))
    return poses


def sample_sequence(video_path: str,
                    estimate: Callable[[object], Optional[PoseFrame]],
                    extractor: Optional[FeatureExtractor] = None,
                    take: int = DEFAULT_TAKE) -> List[FeatureBundle]:
    return build_sequence(sample_pose_frames(video_path, estimate, take), extractor)
