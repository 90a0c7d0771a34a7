"""
Score one transcript and print the report.

Input is either --text or --file (.txt or .srt). For .srt the duration comes
from the cue timings unless --duration is given.

Env:
- SPEECH_LANGUAGE (default: en-US), recorded with the history entry
- HISTORY_PATH (optional), same as --history
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List, Optional

_THIS_DIR = Path(__file__).resolve().parent
sys.path.insert(0, str(_THIS_DIR))

from speechscore.config import ScoringConfig  # noqa: E402
from speechscore.grammar import suggest_correction  # noqa: E402
from speechscore.history import HistoryEntry, HistoryStore  # noqa: E402
from speechscore.pipeline import EmptyInputError, ScoreResult, score  # noqa: E402
from speechscore.srt_io import TranscriptLoadError, load_transcript  # noqa: E402
from speechscore.text_metrics import round_half_up  # noqa: E402


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser()
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--text", help="Transcript text")
    src.add_argument("--file", help="Path to a .txt or .srt transcript")
    ap.add_argument("--duration", type=float, default=None, help="Recording length in seconds")
    cfg = ScoringConfig()
    ap.add_argument(
        "--language",
        choices=cfg.supported_languages,
        default=os.getenv("SPEECH_LANGUAGE", cfg.default_language),
    )
    ap.add_argument("--history", default=os.getenv("HISTORY_PATH"), help="JSON file to append the session to")
    ap.add_argument("--json", action="store_true", help="Print the result as JSON")
    args = ap.parse_args(argv)
    # choices are not checked against the SPEECH_LANGUAGE default
    if args.language not in cfg.supported_languages:
        ap.error(f"unsupported language {args.language!r}, choose from {', '.join(cfg.supported_languages)}")
    return args


def format_report(result: ScoreResult) -> str:
    m = result.metrics
    lines = [
        f"grammar_accuracy={result.grammar_accuracy}",
        f"confidence_level={result.confidence_level}",
        f"overall_performance={result.overall_performance}",
        f"feedback={result.feedback_message}",
        f"total_words={m.total_words}",
        f"filler_count={m.filler_count}",
        f"filler_percent={m.filler_percentage:.1f}%",
        f"vocab_richness={m.vocab_richness * 100:.1f}%",
        f"duration={round_half_up(m.duration_sec)}s",
        f"wpm={round_half_up(m.words_per_minute)}",
    ]
    for title, issues in (
        ("grammar", result.grammar_errors),
        ("fluency", result.fluency_issues),
        ("filler", result.filler_issues),
        ("vocabulary", result.vocab_issues),
    ):
        if not issues:
            continue
        lines.append(f"[{title}]")
        for issue in issues:
            line = f"  {issue.category}: {issue.detail}"
            hint = suggest_correction(issue.category)
            if hint:
                line += f" ({hint})"
            lines.append(line)
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    if args.file:
        try:
            transcript = load_transcript(Path(args.file))
        except (TranscriptLoadError, OSError) as e:
            print(f"Cannot read transcript {args.file}: {e}", file=sys.stderr)
            return 1
        text = transcript.text
        duration = transcript.duration_sec if args.duration is None else args.duration
    else:
        text = args.text
        duration = args.duration or 0.0

    try:
        result = score(text, duration)
    except EmptyInputError:
        print("No speech to analyze.", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(format_report(result))

    if args.history:
        store = HistoryStore(Path(args.history))
        store.add(HistoryEntry.from_result(text, result, args.language))
        print(f"[history] saved to {args.history}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
