from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

SUBJECT_VERB = "Subject-verb agreement"
PAST_TENSE = "Incorrect past tense"
ARTICLE = "Incorrect article usage"
REDUNDANT_PREPOSITION = "Redundant preposition"
REDUNDANT_WORD = "Redundant word"
REPEATED_WORD = "Repeated word"
DOUBLE_NEGATIVE = "Double negative"
REDUNDANT_MODIFIER = "Redundant modifier"
REDUNDANT_EXPRESSION = "Redundant expression"

SHORT_RESPONSE = "Very short response"
RUN_ON = "Run-on sentence"
LOW_VOCAB = "Low vocabulary diversity"
FILLER_WORD = "Filler word"


@dataclass(frozen=True)
class Issue:
    category: str
    detail: str

    def to_dict(self) -> Dict[str, str]:
        return {"category": self.category, "detail": self.detail}
