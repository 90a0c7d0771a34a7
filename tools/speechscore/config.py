from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class ScoringConfig:
    """
    Tunables for scoring.

    Notes:
    - grammar accuracy uses quadratic penalties: n * (5 + n) for n grammar errors
    - confidence uses tiered penalties plus a hard cap when fillers or errors pile up
    - tiers are (threshold, penalty) pairs checked top to bottom, first hit wins
    """

    # Filler vocabulary (single words and phrases, matched on word boundaries)
    filler_phrases: Tuple[str, ...] = (
        "um",
        "uh",
        "err",
        "erm",
        "uhh",
        "umm",
        "ugh",
        "like",
        "you know",
        "i mean",
        "well",
        "so",
        "anyway",
        "basically",
        "actually",
        "literally",
        "sort of",
        "kind of",
        "maybe",
        "probably",
        "possibly",
        "perhaps",
        "i think",
        "really",
        "very much",
        "quite",
        "rather",
        "somewhat",
        "just",
        "namely",
        "so to speak",
        "after all",
    )

    # Issue detection
    short_response_words: int = 10
    run_on_words: int = 25
    low_vocab_ratio: float = 0.4
    repetition_min_len: int = 3  # only tokens of this length or longer count
    repetition_min_count: int = 3  # token repeated this often or more

    # Sentence balance (avg words per sentence)
    sentence_hard_low: float = 6.0
    sentence_hard_high: float = 30.0
    sentence_soft_low: float = 8.0
    sentence_soft_high: float = 20.0
    sentence_hard_penalty: int = 20
    grammar_sentence_soft_penalty: int = 8
    confidence_sentence_soft_penalty: int = 6

    # Quadratic offsets: penalty = n * (offset + n)
    grammar_error_offset: int = 5
    repetition_offset: int = 3

    # Confidence tiers
    filler_tiers: Tuple[Tuple[float, int], ...] = ((20.0, 40), (10.0, 25), (5.0, 12), (0.0, 5))
    vocab_tiers: Tuple[Tuple[float, int], ...] = ((0.4, 30), (0.5, 20), (0.6, 10))
    short_response_tiers: Tuple[Tuple[int, int], ...] = ((12, 18), (20, 8))
    run_on_penalty: int = 5
    run_on_penalty_max: int = 15

    # Cap rule
    cap_filler_percentage: float = 15.0
    cap_grammar_errors: int = 4
    cap_score: float = 70.0

    # Feedback tiers on overall performance
    excellent_min: int = 80
    good_min: int = 70
    moderate_min: int = 50

    # History
    history_max_entries: int = 200
    default_language: str = "en-US"
    supported_languages: Tuple[str, ...] = ("en-US", "ta-IN", "hi-IN")
