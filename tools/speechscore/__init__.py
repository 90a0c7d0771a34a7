"""
speechscore

Rule-based scoring for speech transcripts:
- Grammar accuracy from a fixed table of regex rules, with quadratic penalties
- Confidence level from filler share, vocabulary richness, repetition and sentence balance
- Overall performance is the rounded mean of the two, mapped to a feedback tier
- Transcripts come in as plain text or SRT; audio capture happens elsewhere
"""
from .grammar import MalformedRuleError
from .issues import Issue
from .pipeline import EmptyInputError, Metrics, ScoreResult, score

__all__ = ["EmptyInputError", "Issue", "MalformedRuleError", "Metrics", "ScoreResult", "score"]
