from talkdeck import check_runner

from tests.deck_samples import BROKEN_PYTHON_DECK, SIMPLE_DECK


def test_run_tests_forwards_arguments(monkeypatch):
    recorded = {}

    def fake_main(args):
        recorded["args"] = args
        return 0

    monkeypatch.setattr(check_runner.pytest, "main", fake_main)

    assert check_runner.run_tests(["-k", "deck"]) == 0
    assert recorded["args"] == ["-k", "deck"]


def test_check_deck_passes_valid_deck(tmp_path):
    path = tmp_path / "talk.md"
    path.write_text(SIMPLE_DECK, encoding="utf-8")

    assert check_runner.check_deck(path, expected_slides=4) == 0
    assert check_runner.check_deck(path, expected_slides=3) == 1


def test_check_deck_fails_on_broken_exhibit(tmp_path):
    path = tmp_path / "broken.md"
    path.write_text(BROKEN_PYTHON_DECK, encoding="utf-8")

    assert check_runner.check_deck(path) == 1


def test_check_deck_reports_missing_file(tmp_path, caplog):
    with caplog.at_level("ERROR"):
        assert check_runner.check_deck(tmp_path / "missing.md") == 1

    assert "Cannot load deck" in caplog.text


def test_run_default_stops_when_deck_is_invalid(monkeypatch):
    called = []
    monkeypatch.setattr(check_runner, "configure_logging", lambda level: None)
    monkeypatch.setattr(check_runner, "check_deck", lambda: 1)
    monkeypatch.setattr(check_runner, "run_tests", lambda: called.append(True) or 0)

    assert check_runner.run_default() == 1
    assert called == []
