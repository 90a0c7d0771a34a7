"""
Pytest fixtures for speechscore tests. Sample transcripts with hand-checked scores.
"""

from __future__ import annotations

import pytest

# 4 sentences x 10 words, all tokens distinct, no fillers, no rule hits
FORTY_DISTINCT = (
    "Morning light covered quiet hills while farmers prepared their tools. "
    "Children walked toward school carrying bright green bags and lunches. "
    "Several merchants opened small shops selling fresh bread, cheese, fruit. "
    "Later everyone gathered near town hall for one big celebration."
)

# one sentence, 30 distinct words
THIRTY_WORD_SENTENCE = (
    "Morning light covered quiet hills while farmers prepared their tools and children "
    "walked toward school carrying bright green bags past several merchants opening small "
    "shops selling fresh bread cheese fruit"
)

SRT_SAMPLE = """1
00:00:01,000 --> 00:00:04,000
Hello there.

2
00:00:05,000 --> 00:00:11,500
I am fine today.
"""


@pytest.fixture
def forty_distinct() -> str:
    return FORTY_DISTINCT


@pytest.fixture
def thirty_word_sentence() -> str:
    return THIRTY_WORD_SENTENCE


@pytest.fixture
def srt_text() -> str:
    return SRT_SAMPLE


@pytest.fixture
def transcripts_dir(tmp_path):
    """Directory with one .txt, one .srt and one empty transcript."""
    d = tmp_path / "transcripts"
    (d / "nested").mkdir(parents=True)
    (d / "clear.txt").write_text(FORTY_DISTINCT, encoding="utf-8")
    (d / "nested" / "short.srt").write_text(SRT_SAMPLE, encoding="utf-8")
    (d / "silent.txt").write_text("   \n", encoding="utf-8")
    (d / "notes.md").write_text("ignored", encoding="utf-8")
    return d
