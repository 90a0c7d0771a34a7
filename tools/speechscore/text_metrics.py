from __future__ import annotations

import math
import re
from collections import Counter
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

from .config import ScoringConfig
from .issues import FILLER_WORD, LOW_VOCAB, RUN_ON, SHORT_RESPONSE, Issue

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


@dataclass(frozen=True)
class FillerAnalysis:
    filler_count: int
    filler_percentage: float
    counts: Dict[str, int] = field(default_factory=dict)
    issues: Tuple[Issue, ...] = ()


@dataclass(frozen=True)
class VocabAnalysis:
    richness: float
    unique_count: int
    total_count: int
    issues: Tuple[Issue, ...] = ()


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def tokenize(text: str) -> List[str]:
    return [w for w in text.lower().split() if w]


def split_sentences(text: str) -> List[str]:
    pieces = (p.strip() for p in _SENTENCE_SPLIT_RE.split(text))
    return [p for p in pieces if p]


def _per_100(count: int, words: int) -> float:
    if words <= 0:
        return 0.0
    return (count / words) * 100.0


@lru_cache(maxsize=8)
def _filler_patterns(phrases: Tuple[str, ...]) -> Tuple[Tuple[str, "re.Pattern[str]"], ...]:
    return tuple(
        (p, re.compile(r"\b" + re.escape(p) + r"\b", re.IGNORECASE)) for p in phrases
    )


def detect_fillers(text: str, total_words: int, cfg: Optional[ScoringConfig] = None) -> FillerAnalysis:
    """
    Count every word-boundary occurrence of each filler phrase.

    Phrases are counted independently, so "so to speak" also counts as "so".
    """
    cfg = cfg or ScoringConfig()
    counts: Dict[str, int] = {}
    issues: List[Issue] = []
    for phrase, pattern in _filler_patterns(cfg.filler_phrases):
        n = len(pattern.findall(text))
        if n <= 0:
            continue
        counts[phrase] = n
        issues.append(Issue(FILLER_WORD, f'"{phrase}" used {n} time{"s" if n != 1 else ""}'))

    total = sum(counts.values())
    return FillerAnalysis(
        filler_count=total,
        filler_percentage=_per_100(total, total_words),
        counts=counts,
        issues=tuple(issues),
    )


def analyze_vocabulary(tokens: Sequence[str], cfg: Optional[ScoringConfig] = None) -> VocabAnalysis:
    cfg = cfg or ScoringConfig()
    words = [w for w in tokens if len(w) > 0]
    unique = set(words)
    richness = len(unique) / len(words) if words else 0.0

    issues: Tuple[Issue, ...] = ()
    if richness < cfg.low_vocab_ratio:
        issues = (Issue(LOW_VOCAB, f"Only {round_half_up(richness * 100)}% unique words"),)

    return VocabAnalysis(
        richness=richness,
        unique_count=len(unique),
        total_count=len(words),
        issues=issues,
    )


def detect_fluency_issues(
    tokens: Sequence[str],
    sentences: Sequence[str],
    cfg: Optional[ScoringConfig] = None,
) -> List[Issue]:
    cfg = cfg or ScoringConfig()
    issues: List[Issue] = []
    if len(tokens) < cfg.short_response_words:
        issues.append(Issue(SHORT_RESPONSE, f"Only {len(tokens)} words"))
    for sentence in sentences:
        n = len(sentence.split())
        if n > cfg.run_on_words:
            issues.append(Issue(RUN_ON, f"{n} words without pause"))
    return issues


def count_repeated_tokens(tokens: Sequence[str], cfg: Optional[ScoringConfig] = None) -> int:
    """Number of distinct tokens (long enough to matter) that occur too often."""
    cfg = cfg or ScoringConfig()
    freq = Counter(w for w in tokens if len(w) >= cfg.repetition_min_len)
    return sum(1 for c in freq.values() if c >= cfg.repetition_min_count)


def avg_words_per_sentence(total_words: int, sentence_count: int) -> float:
    return total_words / max(1, sentence_count)
