"""Tests for the anvil command line."""

import json

import pytest

from anvil.cli import build_parser, main


@pytest.fixture
def project(tmp_path):
    folder = tmp_path / "proj"
    folder.mkdir()
    return folder


class TestParser:

    def test_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_repeatable_plugin(self, project):
        args = build_parser().parse_args(
            ["--build-folder", str(project), "--plugin", "a", "--plugin", "./b.py", "plugins"]
        )
        assert args.plugins == ["a", "./b.py"]
        assert args.command == "plugins"


class TestMain:

    def test_plugins_lists_builtins(self, project, capsys):
        assert main(["--build-folder", str(project), "plugins"]) == 0
        out = capsys.readouterr().out.split()
        assert out == [
            "WorkspaceActionConfigurationFilesPlugin",
            "ProjectActionConfigurationFilesPlugin",
            "ResolveActionConfigurationPathsPlugin",
            "CleanPlugin",
        ]

    def test_plugins_includes_config_and_cli_plugins(self, project, capsys):
        (project / "local_plugin.py").write_text(
            "display_name = 'local'\n"
            "def apply(compilation, configuration, options=None):\n"
            "    pass\n"
        )
        (project / "cli_plugin.py").write_text(
            "display_name = 'from-cli'\n"
            "def apply(compilation, configuration, options=None):\n"
            "    pass\n"
        )
        (project / ".anvil").mkdir()
        (project / ".anvil" / "plugins.json").write_text(
            json.dumps({"plugins": [{"plugin": "./local_plugin.py"}]})
        )

        code = main(["--build-folder", str(project), "--plugin", "./cli_plugin.py", "plugins"])

        assert code == 0
        assert capsys.readouterr().out.split()[-2:] == ["local", "from-cli"]

    def test_clean(self, project):
        (project / "dist").mkdir()
        (project / ".anvil").mkdir()
        (project / ".anvil" / "clean.json").write_text(json.dumps({"pathsToDelete": ["dist"]}))

        assert main(["--build-folder", str(project), "clean"]) == 0
        assert not (project / "dist").exists()

    def test_build_runs_build_hook(self, project):
        (project / "marker_plugin.py").write_text(
            "display_name = 'marker'\n"
            "def apply(compilation, configuration, options=None):\n"
            "    def _build(build_configuration):\n"
            "        (configuration.build_folder / 'built.txt').write_text('ok')\n"
            "    compilation.hooks.build.tap(display_name, _build)\n"
        )

        assert main(["--build-folder", str(project), "--plugin", "./marker_plugin.py", "build"]) == 0
        assert (project / "built.txt").read_text() == "ok"

    def test_error_exit_status(self, project):
        assert main(["--build-folder", str(project), "--plugin", "./absent.py", "plugins"]) == 1

    def test_schema(self, capsys):
        assert main(["schema"]) == 0
        schema = json.loads(capsys.readouterr().out)
        assert "plugins" in schema["properties"]
