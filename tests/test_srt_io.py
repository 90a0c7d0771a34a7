"""
Tests for transcript loading from .txt and .srt files.
"""

from __future__ import annotations

import pytest

from speechscore.srt_io import (
    TranscriptLoadError,
    list_transcript_files,
    load_transcript,
    parse_srt_segments,
    segments_duration,
)


def test_srt_segments_sorted_and_normalized():
    raw = """2
00:00:05,000 --> 00:00:06,000
second
line

1
00:00:01,000 --> 00:00:02,000
first

3
00:00:07,000 --> 00:00:07,000
zero length
"""
    segments = parse_srt_segments(raw)
    assert [s.text for s in segments] == ["first", "second line"]
    assert segments_duration(segments) == 5.0


def test_load_srt_transcript(tmp_path, srt_text):
    p = tmp_path / "talk.srt"
    p.write_text(srt_text, encoding="utf-8")
    t = load_transcript(p)
    assert t.text == "Hello there. I am fine today."
    assert t.duration_sec == 10.5
    assert t.source == "srt"


def test_load_txt_transcript(tmp_path):
    p = tmp_path / "talk.TXT"
    p.write_text("Hello\nthere.   Fine.\n", encoding="utf-8")
    t = load_transcript(p)
    assert t.text == "Hello there. Fine."
    assert t.duration_sec == 0.0
    assert t.source == "txt"


def test_empty_srt_gives_empty_text(tmp_path):
    p = tmp_path / "empty.srt"
    p.write_text("", encoding="utf-8")
    t = load_transcript(p)
    assert t.text == ""
    assert t.duration_sec == 0.0


def test_unsupported_suffix(tmp_path):
    p = tmp_path / "talk.docx"
    p.write_text("x", encoding="utf-8")
    with pytest.raises(TranscriptLoadError):
        load_transcript(p)


def test_unparsable_srt(tmp_path):
    p = tmp_path / "broken.srt"
    p.write_text("this is not a subtitle file", encoding="utf-8")
    with pytest.raises(TranscriptLoadError):
        load_transcript(p)


def test_list_transcript_files(transcripts_dir):
    names = [p.name for p in list_transcript_files(transcripts_dir)]
    assert sorted(names) == ["clear.txt", "short.srt", "silent.txt"]
