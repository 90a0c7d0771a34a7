from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple

import pandas as pd
from tqdm import tqdm

from .config import ScoringConfig
from .grammar import detect_grammar_errors
from .issues import Issue
from .scoring import confidence_level_score, grammar_accuracy_score
from .srt_io import TranscriptLoadError, list_transcript_files, load_transcript
from .text_metrics import (
    VocabAnalysis,
    analyze_vocabulary,
    detect_fillers,
    detect_fluency_issues,
    round_half_up,
    split_sentences,
    tokenize,
)

PIPELINE_VERSION = "2026-10-19-tiered-confidence"

Feedback = Literal["Excellent", "Good", "Moderate", "Needs practice"]

FEEDBACK_MESSAGES: Dict[str, str] = {
    "Excellent": "Excellent!",
    "Good": "Good!",
    "Moderate": "Moderate.",
    "Needs practice": "Keep practicing!",
}

log = logging.getLogger(__name__)


class EmptyInputError(ValueError):
    pass


@dataclass(frozen=True)
class Metrics:
    total_words: int
    filler_count: int
    filler_percentage: float
    vocab_richness: float
    duration_sec: float
    words_per_minute: float


@dataclass(frozen=True)
class ScoreResult:
    grammar_accuracy: int
    confidence_level: int
    overall_performance: int
    feedback: Feedback
    grammar_errors: Tuple[Issue, ...]
    fluency_issues: Tuple[Issue, ...]
    filler_issues: Tuple[Issue, ...]
    vocab: VocabAnalysis
    metrics: Metrics

    @property
    def vocab_issues(self) -> Tuple[Issue, ...]:
        return self.vocab.issues

    @property
    def feedback_message(self) -> str:
        return FEEDBACK_MESSAGES[self.feedback]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grammar_accuracy": self.grammar_accuracy,
            "confidence_level": self.confidence_level,
            "overall_performance": self.overall_performance,
            "feedback": self.feedback,
            "feedback_message": self.feedback_message,
            "grammar_errors": [i.to_dict() for i in self.grammar_errors],
            "fluency_issues": [i.to_dict() for i in self.fluency_issues],
            "filler_issues": [i.to_dict() for i in self.filler_issues],
            "vocab_issues": [i.to_dict() for i in self.vocab_issues],
            "vocab": {
                "richness": self.vocab.richness,
                "unique_count": self.vocab.unique_count,
                "total_count": self.vocab.total_count,
            },
            "metrics": asdict(self.metrics),
        }


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def _jsonify(obj: Any) -> Any:
    if obj is None:
        return None
    if isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(_jsonify(x) for x in obj)
    if isinstance(obj, (tuple, list)):
        return [_jsonify(x) for x in obj]
    if isinstance(obj, dict):
        return {str(k): _jsonify(v) for k, v in obj.items()}
    return str(obj)


def overall_performance(grammar_accuracy: int, confidence_level: int) -> int:
    return round_half_up((grammar_accuracy + confidence_level) / 2)


def feedback_for(overall: int, cfg: Optional[ScoringConfig] = None) -> Feedback:
    cfg = cfg or ScoringConfig()
    if overall >= cfg.excellent_min:
        return "Excellent"
    if overall >= cfg.good_min:
        return "Good"
    if overall >= cfg.moderate_min:
        return "Moderate"
    return "Needs practice"


def words_per_minute(total_words: int, duration_sec: float) -> float:
    if duration_sec <= 0:
        return 0.0
    return (total_words / duration_sec) * 60.0


def score(transcript: str, duration_sec: float = 0.0, cfg: Optional[ScoringConfig] = None) -> ScoreResult:
    """
    Score a finalized transcript for grammar accuracy and delivery confidence.

    duration_sec only feeds words-per-minute in the metrics; the scores
    themselves depend on the text alone. Raises EmptyInputError when there
    is nothing to analyze.
    """
    if transcript is None or not transcript.strip():
        raise EmptyInputError("No speech to analyze")
    cfg = cfg or ScoringConfig()

    text = transcript.lower()
    tokens = tokenize(transcript)
    sentences = split_sentences(transcript)
    total_words = len(tokens)

    grammar_errors = detect_grammar_errors(transcript)
    fluency_issues = detect_fluency_issues(tokens, sentences, cfg)
    fillers = detect_fillers(text, total_words, cfg)
    vocab = analyze_vocabulary(tokens, cfg)

    grammar = grammar_accuracy_score(grammar_errors, tokens, sentences, cfg)
    confidence = confidence_level_score(
        fillers.filler_percentage,
        vocab,
        tokens,
        sentences,
        total_words,
        fluency_issues,
        grammar_error_count=len(grammar_errors),
        cfg=cfg,
    )
    overall = overall_performance(grammar, confidence)

    duration = max(0.0, float(duration_sec or 0.0))
    metrics = Metrics(
        total_words=total_words,
        filler_count=fillers.filler_count,
        filler_percentage=fillers.filler_percentage,
        vocab_richness=vocab.richness,
        duration_sec=duration,
        words_per_minute=words_per_minute(total_words, duration),
    )
    log.debug("scored %d words: grammar=%d confidence=%d overall=%d", total_words, grammar, confidence, overall)

    return ScoreResult(
        grammar_accuracy=grammar,
        confidence_level=confidence,
        overall_performance=overall,
        feedback=feedback_for(overall, cfg),
        grammar_errors=tuple(grammar_errors),
        fluency_issues=tuple(fluency_issues),
        filler_issues=fillers.issues,
        vocab=vocab,
        metrics=metrics,
    )


def score_file(path: Path, transcripts_root: Path, cfg: ScoringConfig) -> Dict[str, Any]:
    transcript = load_transcript(path)
    result = score(transcript.text, transcript.duration_sec, cfg)
    m = result.metrics
    return {
        "file_id": path.stem,
        "transcript_path": str(path.relative_to(transcripts_root)).replace("\\", "/"),
        "transcript_source": transcript.source,
        "processed_at_utc": _utc_now_iso(),
        "pipeline_version": PIPELINE_VERSION,
        "duration_sec": round(m.duration_sec, 3),
        "total_words": m.total_words,
        "words_per_minute": round(m.words_per_minute, 3),
        "filler_count": m.filler_count,
        "filler_percentage": round(m.filler_percentage, 6),
        "vocab_richness": round(m.vocab_richness, 6),
        "grammar_error_count": len(result.grammar_errors),
        "fluency_issue_count": len(result.fluency_issues),
        "grammar_accuracy": result.grammar_accuracy,
        "confidence_level": result.confidence_level,
        "overall_performance": result.overall_performance,
        "feedback": result.feedback,
        "issues": result.to_dict(),
    }


CSV_COLUMNS = [
    "file_id",
    "transcript_path",
    "transcript_source",
    "duration_sec",
    "total_words",
    "words_per_minute",
    "filler_count",
    "filler_percentage",
    "vocab_richness",
    "grammar_error_count",
    "fluency_issue_count",
    "grammar_accuracy",
    "confidence_level",
    "overall_performance",
    "feedback",
]


def _write_full_json(public_dir: Path, cfg: ScoringConfig, items: List[Dict[str, Any]], skipped: List[Dict[str, Any]]) -> None:
    payload = {
        "version": 1,
        "generated_at_utc": _utc_now_iso(),
        "pipeline_version": PIPELINE_VERSION,
        "config": _jsonify(asdict(cfg)),
        "items": _jsonify(items),
        "skipped": _jsonify(skipped),
    }
    (public_dir / "scores.full.json").write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def _write_scores_csv(public_dir: Path, items: List[Dict[str, Any]]) -> None:
    df = pd.DataFrame([{k: it.get(k) for k in CSV_COLUMNS} for it in items], columns=CSV_COLUMNS)
    # best speaker first; file_id breaks ties
    df = df.sort_values(["overall_performance", "file_id"], ascending=[False, True], kind="mergesort")
    df.to_csv(public_dir / "scores.csv", index=False, encoding="utf-8")


def _skip_record(path: Path, transcripts_root: Path, reason: str, message: Optional[str] = None) -> Dict[str, Any]:
    rec: Dict[str, Any] = {
        "file_id": path.stem,
        "transcript_path": str(path.relative_to(transcripts_root)).replace("\\", "/"),
        "reason": reason,
        "at_utc": _utc_now_iso(),
    }
    if message is not None:
        rec["message"] = message
    return rec


def run_pipeline(transcripts_dir: Path, public_dir: Path, cfg: Optional[ScoringConfig] = None) -> List[Dict[str, Any]]:
    cfg = cfg or ScoringConfig()
    public_dir.mkdir(parents=True, exist_ok=True)

    print(f"[pipeline] version={PIPELINE_VERSION}")
    files = list_transcript_files(transcripts_dir)
    print(f"[pipeline] transcripts={len(files)} dir={transcripts_dir}")

    items: List[Dict[str, Any]] = []
    skipped: List[Dict[str, Any]] = []
    for p in tqdm(files, desc="Scoring transcripts"):
        try:
            items.append(score_file(p, transcripts_dir, cfg))
        except EmptyInputError:
            print(f"[skip] {p.name}: no speech to analyze")
            skipped.append(_skip_record(p, transcripts_dir, "empty_transcript"))
        except TranscriptLoadError as e:
            print(f"[skip] {p.name}: {e}")
            skipped.append(_skip_record(p, transcripts_dir, "load_error", str(e)))

    items.sort(key=lambda it: (it["transcript_path"], it["file_id"]))
    _write_full_json(public_dir, cfg, items, skipped)
    _write_scores_csv(public_dir, items)
    return items
