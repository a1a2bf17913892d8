"""cli.py
레퍼런스(pro) 영상과 사용자 영상을 비교해 최종 점수와 채널별 점수를 출력.
사용 예:
  shotmatch --pro data/pro_swing.mp4 --user data/my_swing.mp4 \
    --model models/pose_landmarker_full.task --config data/weights.json
"""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys

from .compare import compare_sequences
from .config import DEFAULT_CONFIG, config_key_for_video, load_config
from .errors import InsufficientSequenceError
from .features import FeatureExtractor


def build_parser():
    p = argparse.ArgumentParser(prog="shotmatch", description="Score a user clip against a reference clip")
    p.add_argument("--pro", required=True, help="레퍼런스(pro) 영상 경로")
    p.add_argument("--user", required=True, help="비교할 사용자 영상 경로")
    p.add_argument("--model", default=None, help="MediaPipe PoseLandmarker .task 모델 경로")
    p.add_argument("--config", default=None, help="가중치/감쇠/윈도우 설정 JSON")
    p.add_argument("--config-key", dest="config_key", default=None,
                   help="설정 JSON 안의 key (기본: pro 영상 파일명, 없으면 최상위 사용)")
    p.add_argument("--take", type=int, default=90, help="영상당 샘플링할 프레임 수")
    p.add_argument("--window-ratio", dest="window_ratio", type=float, default=None,
                   help="모든 채널의 DTW 윈도우 비율을 이 값으로 덮어쓰기")
    p.add_argument("--json", action="store_true", help="결과를 JSON으로 출력")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def resolve_config(args):
    if not args.config:
        config = DEFAULT_CONFIG
    else:
        key = args.config_key
        if key is None:
            with open(args.config, "r", encoding="utf-8") as f:
                data = json.load(f)
            default_key = config_key_for_video(args.pro)
            key = default_key if default_key in data else None
        config = load_config(args.config, key=key)
    if args.window_ratio is not None:
        config = config.with_window_ratio(args.window_ratio)
    return config


def main(argv=None):
    a = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if a.verbose else logging.WARNING,
                        format="[%(levelname)s] %(name)s: %(message)s")

    for path in [a.pro, a.user]:
        if not os.path.exists(path):
            print(f"[shotmatch error] 파일을 찾을 수 없습니다: {path}", file=sys.stderr)
            return 1

    try:
        config = resolve_config(a)
    except (OSError, KeyError, ValueError) as e:
        print(f"[shotmatch error] 설정 로드 실패: {e}", file=sys.stderr)
        return 1

    from .extractor import DEFAULT_MODEL_PATH, PoseExtractor
    from .video import sample_sequence

    extractor = FeatureExtractor(config)
    try:
        with PoseExtractor(a.model or DEFAULT_MODEL_PATH) as pe:
            print("[INFO] Analyzing pro video…", file=sys.stderr, flush=True)
            pro_seq = sample_sequence(a.pro, pe.estimate, extractor, take=a.take)
            print("[INFO] Analyzing your video…", file=sys.stderr, flush=True)
            user_seq = sample_sequence(a.user, pe.estimate, extractor, take=a.take)
        print(f"[INFO] usable frames: pro={len(pro_seq)} user={len(user_seq)}", file=sys.stderr, flush=True)
        result = compare_sequences(user_seq, pro_seq, config)
    except InsufficientSequenceError as e:
        print(f"[WARN] Not enough frames detected. {e}", file=sys.stderr)
        return 2
    except Exception as e:
        print(f"[shotmatch error] {e}", file=sys.stderr)
        return 1

    if a.json:
        print(json.dumps(result.to_dict()))
    else:
        print(result.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
