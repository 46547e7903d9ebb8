"""
どこで: `src/noisesketch/__main__.py`。
何を: `python -m noisesketch <sketch>` で variant を選んで起動する CLI。
なぜ: 3 つの variant を同じランナーで切り替えて試せるようにするため。
"""

from __future__ import annotations

import argparse
import logging

from noisesketch.api import run
from noisesketch.sketches import SKETCHES


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="noisesketch", description="Noise-driven generative sketches.")
    ap.add_argument("sketch", choices=sorted(SKETCHES), help="起動する sketch 名")
    ap.add_argument("--seed", type=int, default=None, help="乱数 seed（既定: 現在時刻）")
    ap.add_argument("--config", default=None, help="config.yaml のパス")
    ap.add_argument("--fps", type=float, default=60.0, help="目標フレームレート")
    ap.add_argument("--no-gui", action="store_true", help="設定パネルを開かない")
    ap.add_argument("-v", "--verbose", action="store_true", help="DEBUG ログを出す")
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run(
        args.sketch,
        seed=args.seed,
        config_path=args.config,
        fps=args.fps,
        parameter_gui=not args.no_gui,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
