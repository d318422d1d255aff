"""
Tests for the Lexicon: normalizer and pattern library.

Every score starts here. If normalization or matching is wrong,
nothing downstream can be right.
"""

import re
import time

import pytest
from sanctifai.lexicon import (
    LEXICON_VERSION,
    Lexicon,
    LexiconPattern,
    fuzz,
    lyrics_lexicon,
    match_any,
    normalize,
    seq,
    word,
)


class TestNormalize:
    def test_lowercases(self):
        assert normalize("HELLO World") == "hello world"

    def test_strips_bracketed_annotations(self):
        assert normalize("[Chorus]\nSing it [x2] loud") == "sing it loud"

    def test_annotation_never_matches(self):
        text = normalize("[Verse 1: Devil]\nwalking in the light")
        assert "devil" not in text
        assert lyrics_lexicon.match("occult", text) == []

    def test_curly_quotes_straightened(self):
        assert normalize("Don’t “stop”") == "don't \"stop\""

    def test_whitespace_collapsed_and_trimmed(self):
        assert normalize("  one\t\ttwo \n\n three  ") == "one two three"

    def test_empty_string(self):
        assert normalize("") == ""

    def test_only_annotations(self):
        assert normalize("[Intro] [Outro]") == ""

    @pytest.mark.parametrize("raw", [
        "[Chorus]\nI Praise You   Lord",
        "  ‘quoted’ [note] “thing” ",
        "[a [b] c]",
        "",
        "Tabs\tand\nnewlines",
    ])
    def test_idempotent(self, raw):
        once = normalize(raw)
        assert normalize(once) == once


class TestPatterns:
    def test_boundary_pattern_respects_word_edges(self):
        rx = word("ass(?:hole|hat)?").compile()
        assert rx.search("classic assignment") is None
        assert rx.search("what an asshole").group(0) == "asshole"

    def test_boundary_alternation_is_grouped(self):
        rx = word("slag|slut|whore").compile()
        assert rx.search("slagheap") is None
        assert rx.search("whoreson") is None

    def test_fuzzed_pattern_tolerates_separators(self):
        rx = fuzz("fuck").compile()
        for variant in ("fuck", "f.u.c.k", "f-u-c-k", "f..u..c..k", "F U C K"):
            assert rx.search(variant), variant

    def test_fuzzed_pattern_gap_is_bounded(self):
        rx = fuzz("fuck").compile()
        assert rx.search("f...u.c.k") is None

    def test_fuzzed_pattern_does_not_swallow_trailing_text(self):
        rx = fuzz("fuck").compile()
        assert rx.search("fuck this").group(0) == "fuck"

    def test_case_insensitive(self):
        assert word("satan").compile().search("SATAN")

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            LexiconPattern(source="x", kind="glob").compile()


class TestSequencePattern:
    def test_terms_in_order(self):
        rx = seq("grace|mercy", "through|in", "christ|jesus").compile()
        assert rx.search("saved by grace alone, through faith in christ").group(0) == (
            "grace alone, through faith in christ"
        )

    def test_terms_out_of_order(self):
        rx = seq("hope", "jesus").compile()
        assert rx.search("jesus gives me hope") is None

    def test_terms_respect_word_edges(self):
        rx = seq("holy", "holy").compile()
        assert rx.search("holy unholy") is None
        assert rx.search("holy, holy, holy").group(0) == "holy, holy"

    def test_single_occurrence_is_not_enough(self):
        assert seq("holy", "holy").compile().search("a holy day") is None

    def test_empty_terms_rejected(self):
        with pytest.raises(ValueError):
            LexiconPattern(source="", kind="sequence").compile()

    def test_works_with_match_any(self):
        patterns = [seq("hope", "the lord").compile(), word("hope").compile()]
        assert match_any(patterns, "my hope is in the lord") == [
            "hope is in the lord", "hope",
        ]

    @pytest.mark.parametrize("raw", [
        "grace in " * 6000,
        "hope " * 10000,
        "holy " + "x " * 25000,
    ])
    def test_linear_on_adversarial_input(self, raw):
        text = normalize(raw)
        start = time.perf_counter()
        for category in ("worship", "repentance"):
            lyrics_lexicon.match(category, text)
        assert time.perf_counter() - start < 1.0


class TestMatchAny:
    def test_first_match_per_pattern(self):
        patterns = [re.compile(r"\bkill\b"), re.compile(r"\bgun\b")]
        assert match_any(patterns, "kill kill gun") == ["kill", "gun"]

    def test_duplicates_across_patterns_kept_once(self):
        patterns = [re.compile(r"\bblood\b"), re.compile(r"\bblo+d\b")]
        assert match_any(patterns, "blood on the floor") == ["blood"]

    def test_no_match(self):
        assert match_any([re.compile("x")], "abc") == []


class TestLyricsLexicon:
    def test_version(self):
        assert lyrics_lexicon.version == LEXICON_VERSION

    def test_all_categories_present(self):
        assert set(lyrics_lexicon.categories) == {
            "profanity", "sexual", "violence", "substances", "occult",
            "blasphemy", "selfharm", "worship", "repentance",
        }

    def test_multiple_categories_from_one_line(self):
        text = normalize("The devil made me drunk")
        assert lyrics_lexicon.match("occult", text) == ["devil"]
        assert lyrics_lexicon.match("substances", text) == ["drunk"]

    def test_censored_profanity(self):
        assert lyrics_lexicon.match("profanity", "f.u.c.k") == ["f.u.c.k"]

    def test_blasphemy(self):
        assert lyrics_lexicon.match("blasphemy", "oh jesus christ") == ["jesus christ"]

    def test_selfharm(self):
        assert lyrics_lexicon.match("selfharm", "i want to end my life") == ["end my life"]

    def test_worship(self):
        assert lyrics_lexicon.match("worship", "we worship him") == ["worship him"]

    def test_unknown_category_matches_nothing(self):
        assert lyrics_lexicon.match("gambling", "casino") == []
        assert "gambling" not in lyrics_lexicon

    def test_clean_text_matches_nothing(self):
        text = normalize("The meeting is scheduled for Tuesday afternoon.")
        for category in lyrics_lexicon.categories:
            assert lyrics_lexicon.match(category, text) == []


class TestLexiconExtension:
    def test_extended_adds_category(self):
        lex = lyrics_lexicon.extended({"gambling": [word("casino|poker")]})
        assert lex.match("gambling", "late night poker") == ["poker"]
        assert "gambling" not in lyrics_lexicon

    def test_extended_appends_to_existing_category(self):
        lex = lyrics_lexicon.extended({"occult": [word("necromancy")]})
        assert lex.match("occult", "necromancy") == ["necromancy"]

    def test_describe(self):
        described = Lexicon({"x": [word("a"), fuzz("bc"), seq("d", "e")]}).describe()
        assert described == [{
            "category": "x",
            "patterns": [
                {"kind": "boundary", "source": "a"},
                {"kind": "fuzzed", "source": "bc"},
                {"kind": "sequence", "source": "d ... e"},
            ],
        }]
