"""Unit tests for the top-level command group."""

from arborview.cli.main import main


class TestMain:
    def test_help_lists_commands(self, runner):
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        for name in ("trees", "create", "show", "insert", "remove", "search", "delete", "shell", "init"):
            assert name in result.output

    def test_invalid_config_file_exits(self, runner, workdir):
        bad = workdir / "bad.yaml"
        bad.write_text("log_level: LOUD\n")

        result = runner.invoke(main, ["--config", str(bad), "trees"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_config_file_url_is_used(self, runner, service, connected, workdir):
        config = workdir / "cfg.yaml"
        config.write_text("service_url: http://from-file:8080\n")

        runner.invoke(main, ["--config", str(config), "trees"])

        assert connected.call_args[0][0] == "http://from-file:8080"
