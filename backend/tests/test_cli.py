"""
Inventory Service — Launcher Tests
===================================

uvicorn.run is replaced so no server is actually started.
"""

import pytest

from inventory_app import cli


class TestParser:

    def test_short_flags(self):
        args = cli.build_parser().parse_args(["-h", "0.0.0.0", "-p", "8080", "-c", "/tmp/c"])
        assert (args.host, args.port, args.cache) == ("0.0.0.0", 8080, "/tmp/c")

    def test_long_flags(self):
        args = cli.build_parser().parse_args(
            ["--host", "localhost", "--port", "3000", "--cache", "cache"]
        )
        assert args.host == "localhost"
        assert args.port == 3000

    @pytest.mark.parametrize("argv", [
        [],
        ["-h", "localhost", "-p", "3000"],
        ["-h", "localhost", "-c", "cache"],
        ["-p", "3000", "-c", "cache"],
        ["-h", "localhost", "-p", "not-a-port", "-c", "cache"],
    ])
    def test_missing_or_bad_flag_exits(self, argv):
        with pytest.raises(SystemExit) as exc_info:
            cli.build_parser().parse_args(argv)
        assert exc_info.value.code == 2

    def test_help_is_long_only(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.build_parser().parse_args(["--help"])
        assert exc_info.value.code == 0
        assert "--cache" in capsys.readouterr().out


class TestMain:

    @pytest.fixture
    def served(self, monkeypatch):
        calls = []
        monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
        return calls

    def test_creates_cache_and_serves(self, tmp_path, served):
        cache = tmp_path / "nested" / "cache"
        code = cli.main(["-h", "127.0.0.1", "-p", "4000", "-c", str(cache)])

        assert code == 0
        assert cache.is_dir()
        assert len(served) == 1
        app, kwargs = served[0]
        assert kwargs == {"host": "127.0.0.1", "port": 4000}
        assert app.state.settings.cache_dir == str(cache)

    def test_existing_cache_dir_ok(self, tmp_path, served):
        assert cli.main(["-h", "127.0.0.1", "-p", "4000", "-c", str(tmp_path)]) == 0

    def test_cache_dir_cannot_be_created(self, tmp_path, served):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        code = cli.main(["-h", "127.0.0.1", "-p", "4000", "-c", str(blocker / "cache")])

        assert code == 1
        assert served == []

    def test_port_out_of_range(self, tmp_path, served):
        code = cli.main(["-h", "127.0.0.1", "-p", "70000", "-c", str(tmp_path)])
        assert code == 2
        assert served == []
