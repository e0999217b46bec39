"""Replay recorded landmark frames through a repeat ROM run.

Each input line holds one frame, either ``{"points": [[x, y, z], ...]}`` or a
list of ``{"x", "y", "z"}`` objects. One frame is consumed per tick; when the
file runs out the remaining ticks see no landmarks.

Example:
    uv run python examples/analyze_jsonl.py --path runs/landmarks.jsonl \\
        --count 10 --interval-ms 300 --output runs/rom_results.json
"""

from __future__ import annotations

import argparse
import json
from collections.abc import Iterator
from pathlib import Path

from finger_rom import (
    AnalyzerConfig,
    DipChain,
    ErrorPolicy,
    FrameAnalyzer,
    LandmarkFrame,
    SampleScheduler,
    results_to_json,
    text_log_hook,
)


class _ReplaySource:
    def __init__(self, frames: Iterator[LandmarkFrame]) -> None:
        self._frames = frames

    def get(self) -> LandmarkFrame | None:
        return next(self._frames, None)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run ROM analysis over recorded landmarks.")
    parser.add_argument("--path", required=True, help="Input JSONL file with one frame per line.")
    parser.add_argument("--rom-id", default="12ROM", help="ROM identifier stamped on results.")
    parser.add_argument("--count", type=int, default=10, help="Number of ticks to run.")
    parser.add_argument("--interval-ms", type=int, default=300, help="Tick interval in ms.")
    parser.add_argument(
        "--dip-chain",
        choices=[value.value for value in DipChain],
        default=DipChain.LEGACY.value,
        help="Landmark chain used for joint angles.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort on degenerate frames instead of skipping them.",
    )
    parser.add_argument("--output", default=None, help="Optional JSON file for the result series.")
    return parser.parse_args()


def _iter_frames(path: Path) -> Iterator[LandmarkFrame]:
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            if line.strip():
                yield LandmarkFrame.from_dict(json.loads(line))


def _main() -> int:
    args = _parse_args()
    config = AnalyzerConfig(
        rom_id=args.rom_id,
        error_policy=ErrorPolicy.STRICT if args.strict else ErrorPolicy.TOLERANT,
        dip_chain=DipChain(args.dip_chain),
        log_hook=text_log_hook(print),
    )
    analyzer = FrameAnalyzer(config, source=_ReplaySource(_iter_frames(Path(args.path))))
    scheduler = SampleScheduler(analyzer)

    scheduler.start_repeat(args.count, args.interval_ms)
    scheduler.wait()

    if args.output is not None:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(results_to_json(scheduler.results) + "\n", encoding="utf-8")

    stats = scheduler.get_stats()
    print(
        f"ticks={stats.ticks_completed}"
        f" results={stats.results_appended}"
        f" skipped={stats.frames_skipped}"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(_main())
