from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from .config import ScoringConfig
from .issues import RUN_ON, Issue
from .text_metrics import VocabAnalysis, avg_words_per_sentence, count_repeated_tokens, round_half_up

log = logging.getLogger(__name__)


def _clamp(x: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, x))


def _quadratic(n: int, offset: int) -> int:
    return n * (offset + n) if n > 0 else 0


def _tier_above(value: float, tiers: Sequence[Tuple[float, int]]) -> int:
    for threshold, penalty in tiers:
        if value > threshold:
            return penalty
    return 0


def _tier_below(value: float, tiers: Sequence[Tuple[float, int]]) -> int:
    for threshold, penalty in tiers:
        if value < threshold:
            return penalty
    return 0


def sentence_balance_penalty(total_words: int, sentence_count: int, soft_penalty: int, cfg: ScoringConfig) -> int:
    avg = avg_words_per_sentence(total_words, sentence_count)
    if avg < cfg.sentence_hard_low or avg > cfg.sentence_hard_high:
        return cfg.sentence_hard_penalty
    if avg < cfg.sentence_soft_low or avg > cfg.sentence_soft_high:
        return soft_penalty
    return 0


def grammar_accuracy_score(
    grammar_errors: Sequence[Issue],
    tokens: Sequence[str],
    sentences: Sequence[str],
    cfg: Optional[ScoringConfig] = None,
) -> int:
    """
    Grammar accuracy in 0..100.

    Penalties grow quadratically in the error count and in the number of
    over-used words, plus a flat penalty for unbalanced sentence lengths.
    """
    cfg = cfg or ScoringConfig()

    grammar_pen = _quadratic(len(grammar_errors), cfg.grammar_error_offset)
    repetition_pen = _quadratic(count_repeated_tokens(tokens, cfg), cfg.repetition_offset)
    sentence_pen = sentence_balance_penalty(
        len(tokens), len(sentences), cfg.grammar_sentence_soft_penalty, cfg
    )

    score = 100.0 - grammar_pen - repetition_pen - sentence_pen
    log.debug(
        "grammar penalties: errors=%d repetition=%d sentence=%d -> %.1f",
        grammar_pen,
        repetition_pen,
        sentence_pen,
        score,
    )
    return round_half_up(_clamp(score))


def confidence_level_score(
    filler_percentage: float,
    vocab: VocabAnalysis,
    tokens: Sequence[str],
    sentences: Sequence[str],
    total_words: int,
    fluency_issues: Sequence[Issue],
    grammar_error_count: int = 0,
    cfg: Optional[ScoringConfig] = None,
) -> int:
    """
    Confidence level in 0..100.

    Tiered penalties for filler share, vocabulary richness, repetition,
    sentence balance, run-on sentences and short answers, all taken from
    the same running score. When fillers exceed the cap share or grammar
    errors exceed the cap count the score is held at or below cap_score.
    """
    cfg = cfg or ScoringConfig()
    score = 100.0

    filler_pen = _tier_above(filler_percentage, cfg.filler_tiers)
    score -= filler_pen

    vocab_pen = _tier_below(vocab.richness or 0.0, cfg.vocab_tiers)
    score -= vocab_pen

    repetition_pen = _quadratic(count_repeated_tokens(tokens, cfg), cfg.repetition_offset)
    score -= repetition_pen

    sentence_pen = sentence_balance_penalty(
        total_words, len(sentences), cfg.confidence_sentence_soft_penalty, cfg
    )
    score -= sentence_pen

    run_on_count = sum(1 for i in fluency_issues if i.category == RUN_ON)
    run_on_pen = min(cfg.run_on_penalty_max, run_on_count * cfg.run_on_penalty)
    score -= run_on_pen

    short_pen = _tier_below(total_words, cfg.short_response_tiers)
    score -= short_pen

    capped = filler_percentage > cfg.cap_filler_percentage or grammar_error_count > cfg.cap_grammar_errors
    if capped:
        score = min(score, cfg.cap_score)

    log.debug(
        "confidence penalties: filler=%d vocab=%d repetition=%d sentence=%d run_on=%d short=%d capped=%s -> %.1f",
        filler_pen,
        vocab_pen,
        repetition_pen,
        sentence_pen,
        run_on_pen,
        short_pen,
        capped,
        score,
    )
    return round_half_up(_clamp(score))
