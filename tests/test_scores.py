import json

from blaster.scores import (
    HIGH_SCORE_ENV,
    HighScoreStore,
    MemoryHighScoreStore,
    default_high_score_path,
)


def test_missing_file_reads_zero(tmp_path):
    store = HighScoreStore(str(tmp_path / "scores.json"))
    assert store.load() == 0


def test_record_keeps_the_greater_score(tmp_path):
    path = tmp_path / "scores.json"
    store = HighScoreStore(str(path))
    store.save(7)

    assert store.record(5) == 7
    assert store.load() == 7

    assert store.record(9) == 9
    assert json.loads(path.read_text()) == {"high-score": 9}


def test_creates_parent_directory(tmp_path):
    path = tmp_path / "nested" / "dir" / "scores.json"
    HighScoreStore(str(path)).record(3)
    assert path.exists()


def test_corrupt_file_reads_zero(tmp_path):
    path = tmp_path / "scores.json"
    path.write_text("not json")
    assert HighScoreStore(str(path)).load() == 0

    path.write_text('{"high-score": "many"}')
    assert HighScoreStore(str(path)).load() == 0


def test_corrupt_file_is_overwritten_on_record(tmp_path):
    path = tmp_path / "scores.json"
    path.write_text("[]")
    assert HighScoreStore(str(path)).record(4) == 4


def test_path_from_environment(tmp_path, monkeypatch):
    target = str(tmp_path / "env.json")
    monkeypatch.setenv(HIGH_SCORE_ENV, target)
    assert default_high_score_path() == target
    assert HighScoreStore().path == target


def test_memory_store():
    store = MemoryHighScoreStore(initial=7)
    assert store.record(5) == 7
    assert store.record(9) == 9
    assert store.write_count == 2
