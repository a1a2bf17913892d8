# tests/test_video.py
#
# Frame sampling against a fake capture; no video file or model needed.

import cv2
import pytest

import shotmatch.video as video
from conftest import make_frame


class FakeCapture:
    def __init__(self, n_frames, opened=True):
        self.n = n_frames
        self.pos = 0
        self.opened = opened
        self.released = False

    def isOpened(self):
        return self.opened

    def get(self, prop):
        return float(self.n) if prop == cv2.CAP_PROP_FRAME_COUNT else 0.0

    def set(self, prop, value):
        self.pos = int(value)
        return True

    def grab(self):
        if self.pos >= self.n:
            return False
        self.pos += 1
        return True

    def read(self):
        if self.pos >= self.n:
            return False, None
        idx = self.pos
        self.pos += 1
        return True, idx

    def release(self):
        self.released = True


def test_sample_indices():
    assert len(video.sample_indices(900, 90)) == 90
    assert list(video.sample_indices(50, 90)) == list(range(50))
    assert list(video.sample_indices(0, 90)) == [0]


def test_sample_frames_returns_the_requested_frames():
    got = list(video.sample_frames(FakeCapture(30), take=10))
    assert [i for i, _ in got] == list(range(0, 30, 3))
    assert [f for _, f in got] == list(range(0, 30, 3))


def test_read_frame_at_seeks_backwards():
    cap = FakeCapture(20)
    ok, frame, cur = video.read_frame_at(cap, 12, 0)
    assert (ok, frame, cur) == (True, 12, 13)
    ok, frame, cur = video.read_frame_at(cap, 4, cur)
    assert (ok, frame, cur) == (True, 4, 5)


def test_sample_sequence_uses_estimator(monkeypatch):
    cap = FakeCapture(40)
    monkeypatch.setattr(video.cv2, "VideoCapture", lambda path: cap)

    def estimate(idx):
        if idx % 8 == 0:
            return None  # no person detected
        return make_frame(idx / 40.0)

    seq = video.sample_sequence("clip.mp4", estimate, take=20)
    assert len(seq) == 15
    assert cap.released


def test_unopenable_video(monkeypatch):
    monkeypatch.setattr(video.cv2, "VideoCapture", lambda path: FakeCapture(0, opened=False))
    with pytest.raises(FileNotFoundError):
        video.sample_pose_frames("missing.mp4", lambda f: None)
