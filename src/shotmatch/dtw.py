"""
Sakoe-Chiba 밴드 DTW: 모든 채널이 공유하는 정렬 함수
"""

import math

import numpy as np


def _as_matrix(seq) -> np.ndarray:
    arr = np.asarray(seq, dtype=np.float64)
    if arr.ndim == 1:
        # 스칼라 시퀀스는 1차원 벡터 시퀀스로 취급
        arr = arr.reshape(-1, 1) if arr.size else arr.reshape(0, 0)
    if arr.ndim != 2:
        raise ValueError(f"expected a sequence of vectors, got array with shape {arr.shape}")
    return arr


def band_width(n: int, m: int, window_ratio: float) -> int:
    """Half-width of the band, never narrower than |n - m| so (n, m) stays reachable."""
    return max(int(math.floor(max(n, m) * window_ratio)), abs(n - m))


def align(a, b, window_ratio: float = 0.4) -> float:
    """
    DTW distance between two sequences of d-dim vectors, normalised by (n + m).

    Local cost is Euclidean distance. Cells outside the band stay +inf.
    Ties in the three-way min resolve diagonal, then vertical, then horizontal.
    An empty sequence on either side aligns with distance 0.0.
    """
    if window_ratio < 0:
        raise ValueError("window_ratio must be >= 0")
    a = _as_matrix(a)
    b = _as_matrix(b)
    n, m = a.shape[0], b.shape[0]
    if n == 0 or m == 0:
        return 0.0
    if a.shape[1] != b.shape[1]:
        raise ValueError(f"dimension mismatch: {a.shape[1]} vs {b.shape[1]}")

    w = band_width(n, m, window_ratio)
    inf = math.inf

    # 두 줄만 유지 (메모리 O(m))
    prev = [inf] * (m + 1)
    prev[0] = 0.0
    for i in range(1, n + 1):
        curr = [inf] * (m + 1)
        lo = max(1, i - w)
        hi = min(m, i + w)
        if lo <= hi:
            costs = np.linalg.norm(b[lo - 1:hi] - a[i - 1], axis=1).tolist()
            for j in range(lo, hi + 1):
                best = prev[j - 1]
                if prev[j] < best:
                    best = prev[j]
                if curr[j - 1] < best:
                    best = curr[j - 1]
                curr[j] = costs[j - lo] + best
        prev = curr

    return float(prev[m] / (n + m))


class SequenceAligner:
    """align() with a fixed window ratio."""

    def __init__(self, window_ratio: float = 0.4):
        if window_ratio < 0:
            raise ValueError("window_ratio must be >= 0")
        self.window_ratio = window_ratio

    def __call__(self, a, b) -> float:
        return align(a, b, self.window_ratio)

    def __repr__(self):
        return f"SequenceAligner(window_ratio={self.window_ratio})"
