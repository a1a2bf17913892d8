# tests/test_keypoints.py
#
# Joint name validation, PoseFrame construction and usability lookup.

import numpy as np
import pytest

from shotmatch import JointName, Keypoint, PoseFrame, UnknownJointError, frame_from_landmarks


def test_parse_accepts_exact_names_only():
    assert JointName.parse("left_wrist") is JointName.LEFT_WRIST
    assert JointName.parse(JointName.RIGHT_HIP) is JointName.RIGHT_HIP
    with pytest.raises(UnknownJointError):
        JointName.parse("leftWrist")
    with pytest.raises(ValueError):
        JointName.parse("nose")


def test_from_mapping_rejects_unknown_joint():
    with pytest.raises(UnknownJointError, match="nose"):
        PoseFrame.from_mapping({"left_shoulder": (0, 0, 1.0), "nose": (1, 1, 1.0)})


def test_from_keypoints_rejects_duplicate_joint():
    with pytest.raises(ValueError, match="duplicate"):
        PoseFrame.from_keypoints([
            Keypoint(JointName.LEFT_HIP, 0.0, 0.0, 1.0),
            Keypoint("left_hip", 1.0, 1.0, 1.0),
        ])


def test_keypoint_confidence_range():
    with pytest.raises(ValueError):
        Keypoint(JointName.LEFT_KNEE, 0.0, 0.0, 1.5)


def test_usable_threshold_is_inclusive():
    frame = PoseFrame.from_mapping({"left_knee": (1.0, 2.0, 0.3), "right_knee": (3.0, 4.0, 0.29)})
    assert frame.usable(JointName.LEFT_KNEE, 0.3) is not None
    assert frame.usable(JointName.RIGHT_KNEE, 0.3) is None
    assert frame.usable(JointName.LEFT_ANKLE, 0.3) is None


def test_pose_frame_is_read_only(frame):
    assert len(frame) == 12
    assert frame["left_shoulder"].x == 100.0
    with pytest.raises(TypeError):
        frame[JointName.LEFT_SHOULDER] = Keypoint(JointName.LEFT_SHOULDER, 0, 0, 1)


def test_transformed_scales_then_shifts(frame):
    moved = frame.transformed(scale=2.0, dx=10.0, dy=-5.0)
    kp = moved[JointName.LEFT_SHOULDER]
    assert (kp.x, kp.y) == (210.0, 195.0)
    assert kp.confidence == frame[JointName.LEFT_SHOULDER].confidence


def test_frame_from_blazepose_landmarks():
    lm = np.zeros((33, 4), dtype=np.float32)
    lm[11] = [0.25, 0.5, 0.0, 0.9]   # left shoulder
    lm[16] = [0.75, 0.25, 0.0, 0.2]  # right wrist
    frame = frame_from_landmarks(lm, width=640, height=480)
    ls = frame[JointName.LEFT_SHOULDER]
    assert (ls.x, ls.y) == pytest.approx((160.0, 240.0))
    assert ls.confidence == pytest.approx(0.9)
    assert frame.usable(JointName.RIGHT_WRIST, 0.3) is None
    assert len(frame) == 12
