"""
포즈 추출기 클래스 (MediaPipe PoseLandmarker): BGR 프레임 -> PoseFrame
"""

try:
    import mediapipe as mp
except ImportError:
    raise SystemExit("pip install mediapipe opencv-python numpy")

import cv2
import numpy as np

from .keypoints import PoseFrame, frame_from_landmarks

DEFAULT_MODEL_PATH = "models/pose_landmarker_full.task"  # _lite / _full / _heavy


class PoseExtractor:
    """
    estimate(frame) -> PoseFrame | None.
    샘플 프레임은 시간 순서가 보장되지 않으므로(seek) IMAGE 모드로 실행.
    """

    def __init__(self, model_path=DEFAULT_MODEL_PATH, min_detection_confidence=0.5):
        options = mp.tasks.vision.PoseLandmarkerOptions(
            base_options=mp.tasks.BaseOptions(model_asset_path=str(model_path)),
            running_mode=mp.tasks.vision.RunningMode.IMAGE,
            num_poses=1,
            min_pose_detection_confidence=min_detection_confidence,
            output_segmentation_masks=False,
        )
        self.landmarker = mp.tasks.vision.PoseLandmarker.create_from_options(options)

    def infer(self, bgr):
        """(33, 4) array of x, y, z, visibility (x, y normalised), or None."""
        rgb = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)
        res = self.landmarker.detect(mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb))
        if not res.pose_landmarks:
            return None
        lm = res.pose_landmarks[0]
        arr = np.zeros((len(lm), 4), dtype=np.float32)
        for i, p in enumerate(lm):
            arr[i, 0] = p.x; arr[i, 1] = p.y; arr[i, 2] = p.z
            arr[i, 3] = p.visibility if p.visibility is not None else 0.0
        return arr

    def estimate(self, bgr) -> PoseFrame | None:
        arr = self.infer(bgr)
        if arr is None:
            return None
        h, w = bgr.shape[:2]
        return frame_from_landmarks(arr, width=w, height=h)

    __call__ = estimate

    def close(self):
        self.landmarker.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
