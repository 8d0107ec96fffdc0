import pytest

from rhyme_core.index_builder import build_index


def test_lexicon_entries_carry_stress_and_syllables(context):
    entry = context.entry("TOMATO")
    assert entry.phonemes == ("T", "AH0", "M", "EY1", "T", "OW2")
    assert entry.stress_pattern == "012"
    assert entry.syllable_count == 3
    for e in context.lexicon.values():
        assert e.syllable_count == len(e.stress_pattern)


def test_first_pronunciation_wins(context):
    assert context.entry("EITHER").phonemes[0] == "IY1"
    # a later primary-form duplicate is dropped too
    assert context.entry("PAT").phonemes == ("P", "AE1", "T")
    assert "PAT" in context.perfect_index["AE1 T"]
    assert "AA1 T" not in context.perfect_index


def test_discarded_variants_never_reach_indices(context):
    assert context.perfect_index["OW2"] == ("TOMATO",)
    assert "AA1 T OW2" not in context.tail_index
    assert "AY1 DH ER0" not in context.tail_index


def test_malformed_and_comment_lines_are_skipped(context):
    assert "BROKEN" not in context.lexicon
    assert not any(w.startswith(";;;") for w in context.lexicon)


def test_vowelless_words_only_in_tail_index(context):
    assert context.entry("HMM").syllable_count == 0
    assert all("HMM" not in words for words in context.perfect_index.values())
    assert context.tail_index["HH M"] == ("HMM",)
    assert context.entry("SH") is not None
    assert all("SH" not in words for words in context.tail_index.values())


def test_tail_index_holds_two_and_three_phoneme_suffixes(context):
    assert set(context.tail_index["AE1 T"]) >= {"CAT", "BAT", "HAT", "MAT", "FLAT", "PAT"}
    assert context.tail_index["K AE1 T"] == ("CAT",)
    assert context.tail_index["AE1 K T"] == ("ACT", "FACT")


def test_words_are_canonicalized():
    ctx = build_index([("cat", ["K", "AE1", "T"]), ("Cat(2)", ["K", "AA1", "T"]), ("", ["K"])])
    assert list(ctx.lexicon) == ["CAT"]
    assert ctx.perfect_index == {"AE1 T": ("CAT",)}


def test_context_is_read_only(context):
    with pytest.raises(TypeError):
        context.lexicon["NEW"] = context.entry("CAT")
    with pytest.raises(TypeError):
        context.perfect_index["AE1 T"] = ()
