"""
시퀀스 단위 파생 특징: 속도(위치 차분), 타이밍 지표 벡터
"""

from typing import List, Sequence

import numpy as np

from .features import FeatureBundle


def velocities(seq: Sequence[FeatureBundle]) -> List[np.ndarray]:
    """positions[i] - positions[i-1], len(seq)-1 vectors (empty below 2 frames)."""
    return [curr.positions - prev.positions for prev, curr in zip(seq[:-1], seq[1:])]


def timing_vectors(seq: Sequence[FeatureBundle]) -> List[np.ndarray]:
    """
    프레임별 kinetic-chain 타이밍 지표:
      [proportions[1], proportions[2], positions[0], positions[4]]
      (왼팔 뻗음, 오른팔 뻗음, 왼손목 x, positions[4])
    백스윙/회전 순서를 보기 위한 저차원 투영.
    NOTE: positions[4]는 POSITION_JOINTS 순서상 왼무릎 x 이다. 점수 호환을 위해 인덱스 유지.
    """
    return [
        np.array([f.proportions[1], f.proportions[2], f.positions[0], f.positions[4]], dtype=np.float64)
        for f in seq
    ]
