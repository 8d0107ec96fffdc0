from rhyme_core.phonetics import (
    first_stressed_vowel,
    is_vowel_phoneme,
    parse_cmu_line,
    parse_pron_field,
    perfect_rhyme_key,
    strip_variant,
    stress_pattern,
    tail_key,
    tail_keys,
)
from rhyme_core.prosody import metrical_name, stress_pattern_str

CAT = ["K", "AE1", "T"]
BAT = ["B", "AE1", "T"]
WATER = ["W", "AO1", "T", "ER0"]
SLAUGHTER = ["S", "L", "AO1", "T", "ER0"]
HMM = ["HH", "M"]


def test_vowels_are_marked_by_stress_digits():
    assert is_vowel_phoneme("AE1")
    assert is_vowel_phoneme("ER0")
    assert is_vowel_phoneme("OW2")
    assert not is_vowel_phoneme("K")
    assert not is_vowel_phoneme("NG")


def test_stress_pattern_keeps_vowel_order():
    assert stress_pattern(["T", "AH0", "M", "EY1", "T", "OW2"]) == "012"
    assert stress_pattern(HMM) == ""


def test_perfect_rhyme_key_from_last_vowel():
    assert perfect_rhyme_key(CAT) == "AE1 T"
    assert perfect_rhyme_key(CAT) == perfect_rhyme_key(BAT)


def test_unstressed_final_vowel_anchors_key():
    assert perfect_rhyme_key(WATER) == "ER0"
    assert perfect_rhyme_key(WATER) == perfect_rhyme_key(SLAUGHTER)


def test_no_vowel_means_no_key():
    assert perfect_rhyme_key(HMM) is None
    assert perfect_rhyme_key([]) is None


def test_tail_key_requires_enough_phonemes():
    assert tail_key(CAT, 2) == "AE1 T"
    assert tail_key(CAT, 3) == "K AE1 T"
    assert tail_key(HMM, 3) is None
    assert tail_key(["SH"], 2) is None
    assert tail_keys(HMM) == ["HH M"]
    assert tail_keys(["SH"]) == []


def test_first_stressed_vowel_skips_unstressed():
    assert first_stressed_vowel(["T", "AH0", "M", "EY1", "T", "OW2"]) == "EY1"
    assert first_stressed_vowel(["B", "AH0", "L"]) is None


def test_variant_marker_is_stripped():
    assert strip_variant("TOMATO(1)") == ("TOMATO", True)
    assert strip_variant("TOMATO") == ("TOMATO", False)


def test_parse_cmu_line_skips_comments_and_bare_words():
    assert parse_cmu_line(";;; comment") is None
    assert parse_cmu_line("   ") is None
    assert parse_cmu_line("BROKEN") is None
    assert parse_cmu_line("EITHER(1)  AY1 DH ER0") == ("EITHER(1)", ["AY1", "DH", "ER0"])


def test_parse_pron_field_accepts_json_string():
    assert parse_pron_field('["T","AE1","K"]') == ["T", "AE1", "K"]


def test_parse_pron_field_accepts_whitespace_string():
    assert parse_pron_field("W IH1 N D OW0") == ["W", "IH1", "N", "D", "OW0"]
    assert parse_pron_field(None) == []


def test_stress_display_and_meter():
    assert stress_pattern_str("102") == "1-0-1"
    assert metrical_name(stress_pattern_str("10")) == "Trochee"
    assert metrical_name("1-1-1-1") == "—"
