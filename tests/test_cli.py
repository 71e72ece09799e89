"""Tests for CLI commands.

These tests verify that all CLI commands are registered and that each command
maps lookup outcomes to the documented exit codes.
"""

from unittest.mock import patch

import pytest
import yaml

from article_locator.runner.main import create_cli, main


@pytest.fixture
def config_file(tmp_path, doc_root, temp_db):
    """Config file pointing at the temporary root and index."""
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "index": {"root_directory": str(doc_root), "db_path": str(temp_db)},
                "logging": {"file": None},
            }
        )
    )
    return path


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep main() from reconfiguring the root logger during tests."""
    with patch("article_locator.runner.main.setup_logging"):
        yield


@pytest.fixture
def opener():
    with patch("article_locator.runner.main.open_lookup_result") as mock:
        yield mock


class TestCLICommandRegistry:
    """Tests for CLI command registration."""

    def test_all_commands_registered(self):
        """Verify all expected commands are registered."""
        parser = create_cli()

        subparsers_action = None
        for action in parser._actions:
            if action.dest == "command":
                subparsers_action = action
                break

        assert subparsers_action is not None

        commands = set(subparsers_action.choices.keys())

        assert commands == {"lookup", "find", "rebuild", "status", "macro", "init-config"}

    def test_lookup_arguments(self):
        parser = create_cli()

        args = parser.parse_args(["lookup", "1234(056)"])
        assert args.text == "1234(056)"
        assert args.no_open is False

        args = parser.parse_args(["lookup", "1234 056", "--no-open"])
        assert args.no_open is True

    def test_find_arguments(self):
        args = create_cli().parse_args(["find", "12345", "007"])

        assert (args.article, args.version) == ("12345", "007")

    def test_global_options(self, tmp_path):
        args = create_cli().parse_args(["-c", str(tmp_path / "x.yaml"), "-v", "status"])

        assert args.config == tmp_path / "x.yaml"
        assert args.verbose is True

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()


class TestLookupCommands:
    """Tests for lookup/find exit codes and output."""

    def test_find_found(self, config_file, make_documents, opener, capsys):
        (path,) = make_documents("12345/drawing.02007.pdf")

        code = main(["-c", str(config_file), "find", "12345", "007"])

        assert code == 0
        assert path in capsys.readouterr().out
        opener.assert_called_once()
        assert opener.call_args[0][0].paths == [path]

    def test_find_no_open(self, config_file, make_documents, opener):
        make_documents("12345/drawing.02007.pdf")

        assert main(["-c", str(config_file), "find", "12345", "007", "--no-open"]) == 0
        opener.assert_not_called()

    def test_lookup_cell_value(self, config_file, make_documents, opener, capsys):
        (path,) = make_documents("1234/sheet.10056.pdf")

        code = main(["-c", str(config_file), "lookup", "1234(a) 056", "--no-open"])

        assert code == 0
        assert path in capsys.readouterr().out

    def test_lookup_folder_fallback(self, config_file, make_documents, doc_root, opener, capsys):
        make_documents("12345/drawing.02007.pdf")

        code = main(["-c", str(config_file), "lookup", "12345(999)"])

        assert code == 0
        assert str(doc_root / "12345") in capsys.readouterr().out
        assert opener.call_args[0][0].directory == str(doc_root / "12345")

    def test_lookup_invalid_input(self, config_file, opener, capsys):
        code = main(["-c", str(config_file), "lookup", "hello"])

        assert code == 2
        assert "Invalid input" in capsys.readouterr().out
        opener.assert_not_called()

    def test_find_not_found(self, config_file, opener, capsys):
        code = main(["-c", str(config_file), "find", "12345", "007"])

        assert code == 1
        assert "Nothing found" in capsys.readouterr().out
        opener.assert_not_called()


class TestMaintenanceCommands:
    """Tests for rebuild, status, macro and init-config."""

    def test_rebuild(self, config_file, make_documents, temp_db, capsys):
        make_documents("12345/drawing.02007.pdf", "1234/sheet.10056.pdf", "misc/readme.pdf")

        assert main(["-c", str(config_file), "rebuild"]) == 0

        out = capsys.readouterr().out
        assert "Scanned: 2, Indexed: 2" in out
        assert temp_db.exists()

    def test_rebuild_missing_root(self, tmp_path, temp_db, capsys):
        path = tmp_path / "config.yaml"
        path.write_text(
            yaml.safe_dump(
                {"index": {"root_directory": str(tmp_path / "unmounted"), "db_path": str(temp_db)}}
            )
        )

        assert main(["-c", str(path), "rebuild"]) == 1
        assert "Document root not found" in capsys.readouterr().out
        assert not temp_db.exists()

    def test_status(self, config_file, temp_db, capsys):
        assert main(["-c", str(config_file), "status"]) == 0

        out = capsys.readouterr().out
        assert str(temp_db) in out
        assert "Index exists:    no" in out

    def test_status_corrupt_index(self, config_file, temp_db, capsys):
        temp_db.parent.mkdir(parents=True, exist_ok=True)
        temp_db.write_bytes(b"garbage " * 200)

        assert main(["-c", str(config_file), "status"]) == 1
        assert "unavailable" in capsys.readouterr().out

    def test_macro(self, config_file, capsys):
        assert main(["-c", str(config_file), "macro"]) == 0

        out = capsys.readouterr().out
        assert "Worksheet_BeforeDoubleClick" in out
        assert "article-locator lookup" in out

    def test_init_config(self, tmp_path, capsys):
        target = tmp_path / "new" / "config.yaml"

        assert main(["-c", str(target), "init-config"]) == 0
        assert target.exists()

        assert main(["-c", str(target), "init-config"]) == 1
        assert main(["-c", str(target), "init-config", "--force"]) == 0

    def test_invalid_config(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({"index": {"max_workers": 0}}))

        assert main(["-c", str(path), "status"]) == 1
        assert "Failed to load config" in capsys.readouterr().out

    def test_config_from_environment(self, config_file, monkeypatch, capsys):
        monkeypatch.setenv("ARTICLE_LOCATOR_CONFIG", str(config_file))

        assert main(["macro"]) == 0
