from __future__ import annotations

import json
from pathlib import Path

import pytest

from twinarcade.pong import Statistics
from twinarcade.storage import (BEST_KEY, STATS_KEY, HighScoreStore, KeyValueStore,
                                StatisticsStore, load_json, save_json)


@pytest.fixture()
def kv(tmp_path: Path) -> KeyValueStore:
    return KeyValueStore(tmp_path / "scores.json")


def test_missing_file_gives_defaults(kv: KeyValueStore) -> None:
    assert HighScoreStore(kv).load() == 0
    assert StatisticsStore(kv).load() == Statistics()


def test_best_score_and_statistics_share_one_blob(kv: KeyValueStore) -> None:
    HighScoreStore(kv).save(12)
    StatisticsStore(kv).save(Statistics(games_played=2, wins=1, losses=1, total_score=14))

    raw = json.loads(kv.path.read_text())
    assert raw[BEST_KEY] == 12
    assert raw[STATS_KEY]["gamesPlayed"] == 2
    assert raw[STATS_KEY]["totalScore"] == 14


def test_best_score_never_goes_down(kv: KeyValueStore) -> None:
    store = HighScoreStore(kv)
    history = []
    for final in (3, 9, 4, 9, 2, 11, 0):
        history.append(final)
        store.save(max(store.load(), final))
        assert store.load() == max(history)

    # a stale writer can't lower it either
    assert store.save(1) == 11
    assert store.load() == 11


def test_malformed_blob_falls_back(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "scores.json"
    path.write_text("{not json")
    kv = KeyValueStore(path)

    assert HighScoreStore(kv).load() == 0
    assert StatisticsStore(kv).load() == Statistics()
    assert "could not read" in caplog.text


def test_malformed_values_fall_back(kv: KeyValueStore) -> None:
    kv.set(BEST_KEY, "lots")
    kv.set(STATS_KEY, {"gamesPlayed": "many"})

    assert HighScoreStore(kv).load() == 0
    assert StatisticsStore(kv).load() == Statistics()

    kv.set(STATS_KEY, [1, 2, 3])
    assert StatisticsStore(kv).load() == Statistics()


def test_non_object_blob_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "scores.json"
    path.write_text("[1, 2]")
    kv = KeyValueStore(path)

    assert kv.get(BEST_KEY, 0) == 0
    assert kv.set(BEST_KEY, 5)
    assert json.loads(path.read_text()) == {BEST_KEY: 5}


def test_unwritable_location_is_not_fatal(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    # parent "directory" is a regular file
    assert save_json(blocker / "scores.json", {"a": 1}) is False
    assert load_json(blocker / "scores.json", {"d": 0}) == {"d": 0}


def test_memory_store_has_the_same_contract(memory_kv) -> None:
    kv = memory_kv({BEST_KEY: 4})
    store = HighScoreStore(kv)
    assert store.load() == 4
    store.save(6)
    assert kv.data[BEST_KEY] == 6
