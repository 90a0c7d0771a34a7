from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .issues import (
    ARTICLE,
    DOUBLE_NEGATIVE,
    PAST_TENSE,
    REDUNDANT_EXPRESSION,
    REDUNDANT_MODIFIER,
    REDUNDANT_PREPOSITION,
    REDUNDANT_WORD,
    REPEATED_WORD,
    SUBJECT_VERB,
    Issue,
)


class MalformedRuleError(ValueError):
    pass


@dataclass(frozen=True)
class GrammarRule:
    pattern: "re.Pattern[str]"
    category: str


# (regex, category), evaluated in order against lower-cased text
RULE_TABLE: Tuple[Tuple[str, str], ...] = (
    (r"\bi\s+(?:is|was|go|goes|have|has|do|does)\b", SUBJECT_VERB),
    (r"\bhe\s+(?:go|are|have|do)\b", SUBJECT_VERB),
    (r"\bshe\s+(?:go|are|have|do|don't|didn't)\b", SUBJECT_VERB),
    (r"\bthey\s+(?:goes|was|doesn't|has)\b", SUBJECT_VERB),
    (r"\bwe\s+(?:was|goes|doesn't|has)\b", SUBJECT_VERB),
    (r"\bit\s+(?:have|do|are)\b", SUBJECT_VERB),
    (r"\byou\s+(?:was|goes|doesn't)\b", SUBJECT_VERB),
    (r"\b(?:yesterday|last\s+week)\s+(?:i\s+go|he\s+go|she\s+eat)\b", PAST_TENSE),
    (r"\ba\s+[aeiou]", ARTICLE),
    (r"\bdiscuss\s+about\b", REDUNDANT_PREPOSITION),
    (r"\breturn\s+back\b", REDUNDANT_WORD),
    (r"\b(\w+)\s+\1\b", REPEATED_WORD),
    (r"\b(?:don't|didn't|can't)\s+(?:no|nothing|never|nobody)", DOUBLE_NEGATIVE),
    (r"\b(?:more|very)\s+(?:better|worse|best|worst)\b", REDUNDANT_MODIFIER),
    (r"\beach\s+and\s+every\b", REDUNDANT_EXPRESSION),
)

_SUGGESTIONS = {
    SUBJECT_VERB: 'Ensure the verb agrees with the subject (e.g., "I am" not "I is")',
    PAST_TENSE: "Use correct past tense",
    ARTICLE: 'Use "an" before vowels',
    REDUNDANT_PREPOSITION: "Remove the unnecessary preposition",
}


def compile_rules(table: Iterable[Tuple[str, str]]) -> Tuple[GrammarRule, ...]:
    rules: List[GrammarRule] = []
    for source, category in table:
        try:
            pattern = re.compile(source, re.IGNORECASE)
        except re.error as e:
            raise MalformedRuleError(f"Rule {category!r} has invalid pattern {source!r}: {e}") from e
        rules.append(GrammarRule(pattern=pattern, category=category))
    return tuple(rules)


GRAMMAR_RULES: Tuple[GrammarRule, ...] = compile_rules(RULE_TABLE)


def detect_grammar_errors(text: str, rules: Optional[Sequence[GrammarRule]] = None) -> List[Issue]:
    """
    Run every rule over the lower-cased text and report each match.

    Issues come out in rule order, then match order. The reported phrase is
    cut from the original text so the speaker's casing is kept.
    """
    rules = GRAMMAR_RULES if rules is None else rules
    lower = text.lower()
    # lower() can change length for a few code points; offsets are then unusable
    same_offsets = len(lower) == len(text)

    errors: List[Issue] = []
    for rule in rules:
        for m in rule.pattern.finditer(lower):
            phrase = text[m.start():m.end()] if same_offsets else m.group(0)
            errors.append(Issue(rule.category, phrase))
    return errors


def suggest_correction(category: str) -> Optional[str]:
    return _SUGGESTIONS.get(category)
