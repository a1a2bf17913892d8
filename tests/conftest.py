import pytest

from shotmatch import JointName as J, Keypoint, PoseFrame

BASE_POSE = {
    J.LEFT_SHOULDER: (100.0, 100.0),
    J.RIGHT_SHOULDER: (140.0, 100.0),
    J.LEFT_ELBOW: (90.0, 140.0),
    J.RIGHT_ELBOW: (150.0, 140.0),
    J.LEFT_WRIST: (85.0, 180.0),
    J.RIGHT_WRIST: (155.0, 180.0),
    J.LEFT_HIP: (105.0, 200.0),
    J.RIGHT_HIP: (135.0, 200.0),
    J.LEFT_KNEE: (103.0, 260.0),
    J.RIGHT_KNEE: (137.0, 260.0),
    J.LEFT_ANKLE: (102.0, 320.0),
    J.RIGHT_ANKLE: (138.0, 320.0),
}


def make_frame(t=0.0, confidence=0.9, drop=(), low=()):
    """Swing-like pose at phase t in [0, 1]: arms raise, hips rotate slightly."""
    pts = dict(BASE_POSE)
    pts[J.LEFT_WRIST] = (85.0 - 40.0 * t, 180.0 - 120.0 * t)
    pts[J.RIGHT_WRIST] = (155.0 - 30.0 * t, 180.0 - 110.0 * t)
    pts[J.LEFT_ELBOW] = (90.0 - 15.0 * t, 140.0 - 40.0 * t)
    pts[J.RIGHT_ELBOW] = (150.0 - 10.0 * t, 140.0 - 35.0 * t)
    pts[J.LEFT_HIP] = (105.0 + 5.0 * t, 200.0)
    kps = []
    for joint, (x, y) in pts.items():
        if joint in drop:
            continue
        conf = 0.1 if joint in low else confidence
        kps.append(Keypoint(joint, x, y, conf))
    return PoseFrame.from_keypoints(kps)


def make_frames(n=10, speed=1.0, **kwargs):
    return [make_frame(min(1.0, speed * i / (n - 1)), **kwargs) for i in range(n)]


@pytest.fixture
def frame():
    return make_frame()


@pytest.fixture
def swing_frames():
    return make_frames(10)
