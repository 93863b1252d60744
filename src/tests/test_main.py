from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from read_later.main import main
from read_later.storage import load_list, read_list_file

EXAMPLE = (
    "url: https://example.com\n"
    "title: Example\n"
    "tags: tag1, tag2\n"
    "---\n"
    "url: https://j.com\n"
    "title: J\n"
)


@pytest.fixture(autouse=True)
def no_user_config():
    with patch("read_later.main.load_config", return_value={}) as mock_config:
        yield mock_config


@pytest.fixture
def list_path(tmp_path):
    path = tmp_path / "read_later_list"
    path.write_text(EXAMPLE, encoding="utf-8")
    return str(path)


def run(list_path, *args):
    return main(["-f", list_path, *args])


def test_no_command_prints_usage(capsys):
    assert main([]) == 2
    assert "usage: readlater" in capsys.readouterr().out


def test_list_prints_records(list_path, capsys):
    assert run(list_path, "list") == 0
    assert capsys.readouterr().out == EXAMPLE


def test_list_empty(tmp_path, capsys):
    path = str(tmp_path / "new_list")
    assert run(path, "list") == 0
    assert "Read-later list empty" in capsys.readouterr().out
    assert not os.path.exists(path)


@pytest.mark.parametrize("command", ["save", "add", "update"])
def test_save_with_title_and_tags(list_path, command):
    assert run(list_path, command, "https://new.com", "--title", "New", "--tags", "a,b", "c") == 0
    entry = load_list(list_path).get("https://new.com")
    assert entry.title == "New"
    assert entry.tags == ["a", "b", "c"]


def test_save_replaces_existing_entry(list_path):
    assert run(list_path, "save", "https://example.com", "--title", "Replaced", "--tags", "other") == 0
    read_later_list = load_list(list_path)
    assert len(read_later_list) == 2
    assert read_later_list.get("https://example.com").tags == ["other"]
    assert read_later_list.get("https://example.com").title == "Replaced"


def test_save_prompts_for_missing_title_and_tags(list_path):
    with patch("read_later.main.Prompt.ask", side_effect=["Prompted title", "x, y"]) as mock_ask:
        assert run(list_path, "save", "https://new.com") == 0
    assert mock_ask.call_count == 2
    entry = load_list(list_path).get("https://new.com")
    assert entry.title == "Prompted title"
    assert entry.tags == ["x", "y"]


def test_save_does_not_prompt_for_tags_when_disabled(list_path, no_user_config):
    no_user_config.return_value = {"prompt_for_tags": False}
    with patch("read_later.main.Prompt.ask", return_value="Prompted title") as mock_ask:
        assert run(list_path, "save", "https://new.com") == 0
    mock_ask.assert_called_once()
    assert load_list(list_path).get("https://new.com").tags == []


def test_list_file_from_config(tmp_path, list_path, no_user_config, capsys):
    no_user_config.return_value = {"list_file": list_path}
    assert main(["show", "https://j.com"]) == 0
    assert "https://j.com" in capsys.readouterr().out


def test_show_prints_record(list_path, capsys):
    assert run(list_path, "show", "https://example.com") == 0
    assert capsys.readouterr().out == "url: https://example.com\ntitle: Example\ntags: tag1, tag2\n"


def test_show_missing(list_path, capsys):
    assert run(list_path, "show", "https://missing.com") == 0
    assert "Link https://missing.com not found" in capsys.readouterr().out


def test_delete(list_path):
    assert run(list_path, "delete", "https://j.com") == 0
    assert load_list(list_path).get("https://j.com") is None


def test_delete_missing_leaves_file_alone(list_path, capsys):
    assert run(list_path, "delete", "https://missing.com") == 0
    assert "Link https://missing.com not found" in capsys.readouterr().out
    assert read_list_file(list_path) == EXAMPLE


def test_tag_add_and_remove(list_path):
    assert run(list_path, "tag", "add", "https://j.com", "a", "b,c") == 0
    assert load_list(list_path).get("https://j.com").tags == ["a", "b", "c"]

    assert run(list_path, "tag", "remove", "https://j.com", "b", "missing") == 0
    assert load_list(list_path).get("https://j.com").tags == ["a", "c"]


def test_tag_missing_link(list_path, capsys):
    assert run(list_path, "tag", "add", "https://missing.com", "a") == 1
    assert "Link https://missing.com not found" in capsys.readouterr().err
    assert read_list_file(list_path) == EXAMPLE


def test_search(list_path, capsys):
    assert run(list_path, "search", "TAG2") == 0
    out = capsys.readouterr().out
    assert "https://example.com" in out
    assert "https://j.com" not in out


def test_search_without_matches(list_path, capsys):
    assert run(list_path, "search", "[a-z]+") == 0
    assert "No links match [a-z]+" in capsys.readouterr().out


def test_malformed_list_is_reported_and_left_alone(tmp_path, capsys):
    path = tmp_path / "broken"
    path.write_text("url: https://a.com\n", encoding="utf-8")
    assert run(str(path), "save", "https://b.com", "--title", "B") == 1
    err = capsys.readouterr().err
    assert "Encountered error" in err
    assert "could not parse record 1" in err
    assert path.read_text(encoding="utf-8") == "url: https://a.com\n"


def test_unreadable_list_is_reported(tmp_path, capsys):
    assert run(str(tmp_path), "list") == 1
    assert "Encountered error" in capsys.readouterr().err


def test_browse_runs_app(list_path):
    with patch("read_later.app.ReadLaterApp.run") as mock_run:
        assert run(list_path, "browse") == 0
    mock_run.assert_called_once()


@pytest.mark.parametrize("interruption", [EOFError, KeyboardInterrupt])
def test_save_aborted_at_prompt(list_path, capsys, interruption):
    with patch("read_later.main.Prompt.ask", side_effect=interruption):
        assert run(list_path, "save", "https://new.com") == 1
    assert "Aborted, list file left unchanged." in capsys.readouterr().err
    assert read_list_file(list_path) == EXAMPLE


def test_save_rejects_multiline_title(list_path, capsys):
    assert run(list_path, "save", "https://new.com", "--title", "One\ntwo", "--tags", "a") == 1
    assert "invalid title" in capsys.readouterr().err
    assert read_list_file(list_path) == EXAMPLE


def test_search_prints_records(list_path, capsys):
    assert run(list_path, "search", "https") == 0
    assert capsys.readouterr().out == EXAMPLE
