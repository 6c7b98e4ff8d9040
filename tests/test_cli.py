"""Tests for CLI argument parsing and the antwalk command.

This module tests the command-line interface including:
- Argument parsing and validation
- Building the CLI configuration layer
- Logging setup
- Exit status of the main entry point
"""

import logging.handlers

import pytest
import yaml

from antwalk.cli import (
    CLIError,
    build_config_from_args,
    build_config_manager,
    main,
    parse_arguments,
    setup_logging,
)
from antwalk.core.logging import LogLevel


class TestParseArguments:
    """Test argument parsing."""

    def test_parse_basic_arguments(self):
        """Parses root and repeated patterns."""
        args = parse_arguments(["project", "-i", "src/**", "--include", "lib/**", "-e", "**/test/**"])

        assert args.root == "project"
        assert args.includes == ["src/**", "lib/**"]
        assert args.excludes == ["**/test/**"]
        assert not args.ignore_case
        assert not args.dirs
        assert args.format is None

    def test_config_without_root(self):
        """A config file may supply the root."""
        args = parse_arguments(["--config", "antwalk.yaml"])
        assert args.root is None
        assert args.config == "antwalk.yaml"

    def test_requires_root_or_config(self):
        with pytest.raises(CLIError, match="Either ROOT or --config"):
            parse_arguments([])

    def test_empty_format(self):
        with pytest.raises(CLIError, match="--format cannot be empty"):
            parse_arguments(["project", "--format", ""])

    @pytest.mark.parametrize("option", ["-i", "-e"])
    def test_empty_pattern(self, option):
        with pytest.raises(CLIError, match="pattern cannot be empty"):
            parse_arguments(["project", option, ""])

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_arguments(["--version"])
        assert exc_info.value.code == 0
        assert "antwalk 1.0.0" in capsys.readouterr().out


class TestBuildConfigFromArgs:
    """Test conversion of arguments into a configuration layer."""

    def test_only_given_options(self):
        """Unset flags leave lower layers alone."""
        args = parse_arguments(["project"])
        assert build_config_from_args(args) == {"root": "project"}

    def test_all_options(self):
        args = parse_arguments(
            [
                "project",
                "-i", "src/**",
                "-e", "**/test/**",
                "--ignore-case",
                "--no-follow-symlinks",
                "--default-excludes",
                "--dirs",
                "--format", "{{ name }}",
                "--verbose",
                "--log-file", "/tmp/antwalk.log",
            ]
        )

        assert build_config_from_args(args) == {
            "root": "project",
            "selection": {
                "includes": ["src/**"],
                "excludes": ["**/test/**"],
                "case_sensitive": False,
                "follow_symlinks": False,
                "default_excludes": True,
            },
            "output": {"format": "{{ name }}", "include_dirs": True},
            "logging": {"level": "INFO", "file": "/tmp/antwalk.log"},
        }

    def test_debug_beats_verbose(self):
        args = parse_arguments(["project", "--verbose", "--debug"])
        assert build_config_from_args(args)["logging"] == {"level": "DEBUG"}


class TestBuildConfigManager:
    """Test layering of file, environment and arguments."""

    def test_arguments_override_file(self, config_file):
        args = parse_arguments(["--config", str(config_file), "-e", "**/*.class"])
        config = build_config_manager(args)

        assert config.get("root") == "project"
        assert config.get_includes() == ["src/**"]
        assert config.get_excludes() == ["**/*.class"]

    def test_environment_between_file_and_arguments(self, config_file, monkeypatch):
        monkeypatch.setenv("ANTWALK_OUTPUT__INCLUDE_DIRS", "false")
        monkeypatch.setenv("ANTWALK_ROOT", "from-env")

        config = build_config_manager(parse_arguments(["--config", str(config_file), "cli-root"]))

        assert config.get("output.include_dirs") is False
        assert config.get("root") == "cli-root"

    def test_no_root_anywhere(self, tmp_path):
        path = tmp_path / "no_root.yaml"
        path.write_text(yaml.dump({"selection": {"includes": ["src/**"]}}))

        with pytest.raises(CLIError, match="No root configured"):
            build_config_manager(parse_arguments(["--config", str(path)]))


class TestSetupLogging:
    """Test logger creation from configuration."""

    def test_default_level(self):
        config = build_config_manager(parse_arguments(["project"]))
        assert setup_logging(config).get_level() == LogLevel.WARNING

    def test_debug_level(self):
        config = build_config_manager(parse_arguments(["project", "--debug"]))
        assert setup_logging(config).get_level() == LogLevel.DEBUG

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "antwalk.log"
        config = build_config_manager(
            parse_arguments(["project", "--debug", "--log-file", str(log_file)])
        )

        logger = setup_logging(config)
        handlers = logger.logger.handlers
        assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in handlers)
        for handler in handlers:
            handler.flush()
        assert "Logging to file" in log_file.read_text()
        for handler in list(handlers):
            logger.remove_handler(handler)
            handler.close()


class TestMain:
    """Test the main entry point."""

    def test_lists_selected_files(self, project_dir, capsys):
        status = main([str(project_dir), "-i", "src/**", "-e", "**/test/**"])

        captured = capsys.readouterr()
        assert status == 0
        assert captured.out == "src/main/Foo.java\n"

    def test_dirs_and_format(self, project_dir, capsys):
        status = main(
            [str(project_dir), "-e", "build/", "--dirs", "--format", "{{ kind }} {{ relative_path }}"]
        )

        assert status == 0
        assert capsys.readouterr().out.splitlines() == [
            "dir src",
            "dir src/main",
            "dir src/test",
            "file src/main/Foo.java",
            "file src/test/FooTest.java",
        ]

    def test_config_file(self, project_dir, config_file, capsys, monkeypatch):
        monkeypatch.chdir(project_dir.parent)

        status = main(["--config", str(config_file)])

        assert status == 0
        assert capsys.readouterr().out.splitlines() == [
            "dir:src",
            "dir:src/main",
            "file:src/main/Foo.java",
        ]

    def test_ignore_case(self, project_dir, capsys):
        assert main([str(project_dir), "-i", "**/*.JAVA", "--ignore-case"]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "src/main/Foo.java",
            "src/test/FooTest.java",
        ]

    def test_missing_root_is_not_an_error(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing")]) == 0
        assert capsys.readouterr().out == ""

    def test_invalid_pattern(self, project_dir, capsys):
        assert main([str(project_dir), "-i", "src/a**"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_template(self, project_dir, capsys):
        assert main([str(project_dir), "--format", "{{ nope }}"]) == 1
        captured = capsys.readouterr()
        assert "unknown variable(s) nope" in captured.err
        assert captured.out == ""

    def test_missing_config_file(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "missing.yaml")]) == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_usage_error(self, capsys):
        assert main([]) == 1
        assert "Either ROOT or --config" in capsys.readouterr().err

    def test_keyboard_interrupt(self, project_dir, monkeypatch, capsys):
        def interrupted(config, logger, stream=None):
            raise KeyboardInterrupt

        monkeypatch.setattr("antwalk.main.run_antwalk", interrupted)
        assert main([str(project_dir)]) == 130
        assert "Interrupted" in capsys.readouterr().err

    def test_unexpected_error(self, project_dir, monkeypatch, capsys):
        def broken(config, logger, stream=None):
            raise RuntimeError("walker exploded")

        monkeypatch.setattr("antwalk.main.run_antwalk", broken)
        assert main([str(project_dir)]) == 1
        assert "Unexpected error: walker exploded" in capsys.readouterr().err
