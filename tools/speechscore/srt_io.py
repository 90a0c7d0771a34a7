from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

import srt

TRANSCRIPT_SUFFIXES = (".srt", ".txt")


class TranscriptLoadError(ValueError):
    pass


@dataclass(frozen=True)
class Segment:
    start: float
    end: float
    text: str


@dataclass(frozen=True)
class TranscriptInput:
    text: str
    duration_sec: float
    source: str


def _normalize_text(text: str) -> str:
    return " ".join(text.replace("\n", " ").split()).strip()


def parse_srt_segments(raw: str) -> List[Segment]:
    segments: List[Segment] = []
    try:
        for cue in srt.parse(raw):
            start = cue.start.total_seconds()
            end = cue.end.total_seconds()
            if end <= start:
                continue
            text = _normalize_text(cue.content)
            if not text:
                continue
            segments.append(Segment(start=float(start), end=float(end), text=text))
    except srt.SRTParseError as e:
        raise TranscriptLoadError(f"Unparsable SRT content: {e}") from e
    segments.sort(key=lambda s: (s.start, s.end))
    return segments


def load_srt_segments(path: Path) -> List[Segment]:
    return parse_srt_segments(path.read_text(encoding="utf-8-sig", errors="replace"))


def segments_duration(segments: List[Segment]) -> float:
    if not segments:
        return 0.0
    return max(s.end for s in segments) - segments[0].start


def load_transcript(path: Path) -> TranscriptInput:
    """
    Read a transcript from disk.

    .srt: cue texts joined in time order, duration spans first cue start to last cue end.
    .txt: whole file as text, duration unknown (0).
    """
    suffix = path.suffix.lower()
    if suffix == ".srt":
        segments = load_srt_segments(path)
        text = " ".join(s.text for s in segments).strip()
        return TranscriptInput(text=text, duration_sec=segments_duration(segments), source="srt")
    if suffix == ".txt":
        text = _normalize_text(path.read_text(encoding="utf-8-sig", errors="replace"))
        return TranscriptInput(text=text, duration_sec=0.0, source="txt")
    raise TranscriptLoadError(f"Unsupported transcript type: {path.name}")


def list_transcript_files(transcripts_dir: Path) -> List[Path]:
    return sorted(
        p for p in transcripts_dir.rglob("*") if p.is_file() and p.suffix.lower() in TRANSCRIPT_SUFFIXES
    )
