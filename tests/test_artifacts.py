import json

import pytest

from rhyme_core import artifacts
from rhyme_core.artifacts import load_context, load_frequency_list, load_lexicon, wordfreq_ranks
from rhyme_core.errors import ArtifactLoadError
from rhyme_core.index_builder import LEXICON_FILE, PERFECT_INDEX_FILE, TAIL_INDEX_FILE, write_artifacts
from rhyme_core.search import compare_words


def test_round_trip(context, tmp_path):
    write_artifacts(context, tmp_path)
    loaded = load_context(tmp_path, frequency_ranks=dict(context.frequency_ranks))
    assert dict(loaded.lexicon) == dict(context.lexicon)
    assert dict(loaded.perfect_index) == dict(context.perfect_index)
    assert dict(loaded.tail_index) == dict(context.tail_index)
    assert compare_words(loaded, ["CAT"]) == compare_words(context, ["CAT"])


def test_lexicon_file_format(context, tmp_path):
    write_artifacts(context, tmp_path)
    data = json.loads((tmp_path / LEXICON_FILE).read_text(encoding="utf-8"))
    assert data["CAT"] == {"phonemes": ["K", "AE1", "T"], "stressPattern": "1", "syllableCount": 1}


def test_compact_lexicon_shape(tmp_path):
    path = tmp_path / LEXICON_FILE
    path.write_text(json.dumps({"CAT": {"p": ["K", "AE1", "T"], "s": "1", "c": 1}}), encoding="utf-8")
    assert load_lexicon(path)["CAT"].phonemes == ("K", "AE1", "T")


def test_duplicate_canonical_keys_keep_first(tmp_path):
    path = tmp_path / LEXICON_FILE
    path.write_text(json.dumps({
        "CAF\u00c9": {"p": ["K", "AE0", "F", "EY1"], "s": "01", "c": 2},
        "CAFE": {"p": ["K", "AH0", "F", "EY1"], "s": "01", "c": 2},
    }), encoding="utf-8")
    lexicon = load_lexicon(path)
    assert list(lexicon) == ["CAFE"]
    assert lexicon["CAFE"].phonemes == ("K", "AE0", "F", "EY1")


def test_missing_artifact_is_an_error(tmp_path):
    with pytest.raises(ArtifactLoadError) as exc:
        load_context(tmp_path)
    assert LEXICON_FILE in str(exc.value)


def test_invalid_json(context, tmp_path):
    write_artifacts(context, tmp_path)
    (tmp_path / TAIL_INDEX_FILE).write_text("{not json", encoding="utf-8")
    with pytest.raises(ArtifactLoadError, match="invalid JSON"):
        load_context(tmp_path)


def test_lfs_pointer(context, tmp_path):
    write_artifacts(context, tmp_path)
    (tmp_path / PERFECT_INDEX_FILE).write_text(
        "version https://git-lfs.github.com/spec/v1\noid sha256:abc\nsize 12\n", encoding="utf-8")
    with pytest.raises(ArtifactLoadError, match="LFS"):
        load_context(tmp_path)


@pytest.mark.parametrize("payload", [
    [],
    {"CAT": "K AE1 T"},
    {"CAT": {"phonemes": []}},
    {"CAT": {"phonemes": ["K", "AE1", "T"], "stressPattern": "1", "syllableCount": 2}},
])
def test_bad_lexicon_shapes(tmp_path, payload):
    path = tmp_path / LEXICON_FILE
    path.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ArtifactLoadError):
        load_lexicon(path)


def test_frequency_list(tmp_path):
    path = tmp_path / "frequency_list.txt"
    path.write_text("the\n\ncat\nThe\nbat\n", encoding="utf-8")
    assert load_frequency_list(path) == {"THE": 0, "CAT": 2, "BAT": 4}
    with pytest.raises(ArtifactLoadError):
        load_frequency_list(tmp_path / "nope.txt")


def test_frequency_path_overrides_ranks(context, tmp_path):
    write_artifacts(context, tmp_path)
    freq = tmp_path / "frequency_list.txt"
    freq.write_text("PAT\nFLAT\n", encoding="utf-8")
    loaded = load_context(tmp_path, frequency_path=freq)
    assert compare_words(loaded, ["CAT"], limit=2).words() == ["PAT", "FLAT"]


def test_wordfreq_ranks(monkeypatch):
    monkeypatch.setattr(artifacts, "top_n_list", lambda lang, n: ["the", "cat", "The"][:n])
    assert wordfreq_ranks(3) == {"THE": 0, "CAT": 1}
