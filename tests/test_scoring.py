"""
Tests for the grammar accuracy and confidence level scorers.
"""

from __future__ import annotations

from speechscore.config import ScoringConfig
from speechscore.issues import RUN_ON, SHORT_RESPONSE, Issue
from speechscore.scoring import confidence_level_score, grammar_accuracy_score, sentence_balance_penalty
from speechscore.text_metrics import VocabAnalysis

RICH = VocabAnalysis(richness=0.9, unique_count=9, total_count=10)


def _errors(n):
    return [Issue("Subject-verb agreement", "I is")] * n


def _balanced(total_words=40):
    """Distinct tokens split into sentences of 10 words."""
    tokens = [f"word{i}" for i in range(total_words)]
    sentences = [" ".join(tokens[i:i + 10]) for i in range(0, total_words, 10)]
    return tokens, sentences


def test_grammar_perfect():
    tokens, sentences = _balanced()
    assert grammar_accuracy_score([], tokens, sentences) == 100


def test_grammar_quadratic_error_penalty():
    tokens, sentences = _balanced()
    assert grammar_accuracy_score(_errors(1), tokens, sentences) == 94
    assert grammar_accuracy_score(_errors(2), tokens, sentences) == 86
    assert grammar_accuracy_score(_errors(3), tokens, sentences) == 76


def test_grammar_clamped_at_zero():
    tokens, sentences = _balanced()
    assert grammar_accuracy_score(_errors(10), tokens, sentences) == 0


def test_grammar_repetition_penalty():
    tokens, sentences = _balanced()
    tokens = tokens[:34] + ["same"] * 3 + ["again"] * 3
    assert grammar_accuracy_score([], tokens, sentences) == 100 - 2 * (3 + 2)


def test_grammar_empty_inputs():
    """No words: average 0 per sentence gets the hard sentence penalty."""
    assert grammar_accuracy_score([], [], []) == 80


def test_sentence_balance_tiers():
    cfg = ScoringConfig()
    assert sentence_balance_penalty(5, 1, 8, cfg) == 20
    assert sentence_balance_penalty(31, 1, 8, cfg) == 20
    assert sentence_balance_penalty(7, 1, 8, cfg) == 8
    assert sentence_balance_penalty(21, 1, 8, cfg) == 8
    assert sentence_balance_penalty(30, 1, 6, cfg) == 6
    assert sentence_balance_penalty(8, 1, 8, cfg) == 0
    assert sentence_balance_penalty(20, 1, 8, cfg) == 0
    # zero sentences count as one
    assert sentence_balance_penalty(10, 0, 8, cfg) == 0


def test_confidence_perfect():
    tokens, sentences = _balanced()
    assert confidence_level_score(0.0, RICH, tokens, sentences, 40, []) == 100


def test_confidence_filler_tiers():
    tokens, sentences = _balanced()
    expected = {0.0: 100, 0.1: 95, 5.0: 95, 5.1: 88, 10.0: 88, 10.5: 75, 15.0: 75}
    for pct, score in expected.items():
        assert confidence_level_score(pct, RICH, tokens, sentences, 40, []) == score, pct


def test_confidence_filler_above_cap_share_is_capped():
    tokens, sentences = _balanced()
    # 15.5% -> -25 gives 75, cap pulls it to 70
    assert confidence_level_score(15.5, RICH, tokens, sentences, 40, []) == 70
    # 25% -> -40 gives 60, already under the cap
    assert confidence_level_score(25.0, RICH, tokens, sentences, 40, []) == 60


def test_confidence_vocab_tiers():
    tokens, sentences = _balanced()
    for richness, score in ((0.39, 70), (0.4, 80), (0.49, 80), (0.5, 90), (0.59, 90), (0.6, 100)):
        vocab = VocabAnalysis(richness=richness, unique_count=0, total_count=40)
        assert confidence_level_score(0.0, vocab, tokens, sentences, 40, []) == score, richness


def test_confidence_run_on_penalty_is_bounded():
    tokens, sentences = _balanced()
    run_ons = [Issue(RUN_ON, "30 words without pause")] * 4
    other = [Issue(SHORT_RESPONSE, "Only 3 words")]
    assert confidence_level_score(0.0, RICH, tokens, sentences, 40, run_ons[:1]) == 95
    assert confidence_level_score(0.0, RICH, tokens, sentences, 40, run_ons) == 85
    assert confidence_level_score(0.0, RICH, tokens, sentences, 40, other) == 100


def test_confidence_short_response_tiers():
    for total, score in ((11, 82), (12, 92), (19, 92), (20, 100)):
        tokens = [f"w{i}" for i in range(total)]
        sentences = [" ".join(tokens)]
        assert confidence_level_score(0.0, RICH, tokens, sentences, total, []) == score, total


def test_confidence_sentence_soft_penalty_is_six():
    tokens = [f"w{i}" for i in range(21)]
    assert confidence_level_score(0.0, RICH, tokens, [" ".join(tokens)], 21, []) == 94


def test_confidence_grammar_cap():
    tokens, sentences = _balanced()
    assert confidence_level_score(0.0, RICH, tokens, sentences, 40, [], grammar_error_count=4) == 100
    assert confidence_level_score(0.0, RICH, tokens, sentences, 40, [], grammar_error_count=5) == 70


def test_confidence_clamped_at_zero():
    tokens = ["um"] * 5
    vocab = VocabAnalysis(richness=0.2, unique_count=1, total_count=5)
    assert confidence_level_score(100.0, vocab, tokens, ["um um um um um"], 5, [], grammar_error_count=9) == 0


def test_custom_cap_score():
    tokens, sentences = _balanced()
    cfg = ScoringConfig(cap_score=50.0)
    assert confidence_level_score(0.0, RICH, tokens, sentences, 40, [], grammar_error_count=5, cfg=cfg) == 50
