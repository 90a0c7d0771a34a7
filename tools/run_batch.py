"""
Score every transcript in a directory.

Env:
- TRANSCRIPTS_DIR (default: transcripts)
- PUBLIC_DIR (default: public)
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

_THIS_DIR = Path(__file__).resolve().parent
sys.path.insert(0, str(_THIS_DIR))

from speechscore.pipeline import run_pipeline  # noqa: E402


def main() -> None:
    transcripts_dir = Path(os.getenv("TRANSCRIPTS_DIR", "transcripts")).resolve()
    public_dir = Path(os.getenv("PUBLIC_DIR", "public")).resolve()

    if not transcripts_dir.exists():
        raise SystemExit(f"Missing transcripts_dir: {transcripts_dir}")

    run_pipeline(transcripts_dir=transcripts_dir, public_dir=public_dir)


if __name__ == "__main__":
    main()
