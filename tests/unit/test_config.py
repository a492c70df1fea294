#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for configuration discovery and loading."""

import json
from pathlib import Path

import pytest

from mdpreview.config import (
    PreviewConfig,
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    load_config_with_priority,
    load_options,
    merge_configs,
    options_from_config,
)
from mdpreview.exceptions import ConfigurationError
from mdpreview.theme import Theme


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch) -> Path:
    """Keep the user's home directory and environment out of discovery."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.delenv("MDPREVIEW_CONFIG", raising=False)
    return home


@pytest.mark.unit
class TestLoadConfigFile:
    """Test loading each supported file format."""

    def test_toml(self, tmp_path: Path) -> None:
        """Test .toml files."""
        path = tmp_path / ".mdpreview.toml"
        path.write_text('theme = "PureDark"\n\n[session]\ndebounce_ms = 150\n')
        assert load_config_file(path) == {"theme": "PureDark", "session": {"debounce_ms": 150}}

    def test_yaml(self, tmp_path: Path) -> None:
        """Test .yaml files."""
        path = tmp_path / ".mdpreview.yaml"
        path.write_text("preview:\n  bullet_glyph: '-'\n  max_image_width: 640\n")
        assert load_config_file(path) == {"preview": {"bullet_glyph": "-", "max_image_width": 640}}

    def test_empty_yaml(self, tmp_path: Path) -> None:
        """Test an empty YAML file is an empty configuration."""
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_json(self, tmp_path: Path) -> None:
        """Test .json files."""
        path = tmp_path / ".mdpreview.json"
        path.write_text(json.dumps({"markdown": {"parse_math": False}}))
        assert load_config_file(path) == {"markdown": {"parse_math": False}}

    def test_pyproject_section(self, tmp_path: Path) -> None:
        """Test the [tool.mdpreview] section of pyproject.toml."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.mdpreview]\ntheme = true\n')
        assert load_config_file(path) == {"theme": True}

    def test_pyproject_without_section(self, tmp_path: Path) -> None:
        """Test a pyproject.toml without the section is an empty configuration."""
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n')
        assert load_config_file(path) == {}

    @pytest.mark.parametrize(
        "filename,content",
        [
            ("bad.toml", "theme = = 1"),
            ("bad.json", "{not json"),
            ("list.json", "[1, 2]"),
            ("bad.yaml", "key: [unclosed"),
            ("list.yaml", "- a\n- b\n"),
            ("config.ini", "[x]\n"),
        ],
    )
    def test_invalid_files(self, tmp_path: Path, filename: str, content: str) -> None:
        """Test malformed files and unsupported formats raise ConfigurationError."""
        path = tmp_path / filename
        path.write_text(content)
        with pytest.raises(ConfigurationError) as exc_info:
            load_config_file(path)
        assert exc_info.value.config_path == str(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            load_config_file(tmp_path / "nope.toml")


@pytest.mark.unit
class TestDiscovery:
    """Test config file discovery."""

    def test_found_in_parent(self, tmp_path: Path) -> None:
        """Test a config in an ancestor directory is found."""
        config = tmp_path / "project" / ".mdpreview.toml"
        nested = tmp_path / "project" / "docs" / "chapter"
        nested.mkdir(parents=True)
        config.write_text("theme = false\n")

        assert find_config_in_parents(nested) == config.resolve()

    def test_priority_within_directory(self, tmp_path: Path) -> None:
        """Test .toml wins over .json in the same directory."""
        (tmp_path / ".mdpreview.json").write_text("{}")
        (tmp_path / ".mdpreview.toml").write_text("")
        assert find_config_in_parents(tmp_path).name == ".mdpreview.toml"

    def test_pyproject_needs_section(self, tmp_path: Path) -> None:
        """Test pyproject.toml only counts when it has the tool section."""
        project = tmp_path / "project"
        project.mkdir()
        (project / "pyproject.toml").write_text('[project]\nname = "x"\n')
        assert find_config_in_parents(project) != (project / "pyproject.toml").resolve()

        (project / "pyproject.toml").write_text("[tool.mdpreview]\ntheme = true\n")
        assert find_config_in_parents(project) == (project / "pyproject.toml").resolve()

    def test_broken_pyproject_skipped(self, tmp_path: Path) -> None:
        """Test an unparsable pyproject.toml does not stop discovery."""
        project = tmp_path / "project"
        project.mkdir()
        (project / "pyproject.toml").write_text("not = = toml")
        (tmp_path / ".mdpreview.yaml").write_text("theme: true\n")
        assert find_config_in_parents(project) == (tmp_path / ".mdpreview.yaml").resolve()

    def test_home_fallback(self, tmp_path: Path, isolated_environment: Path) -> None:
        """Test the home directory is checked when no parent has a config."""
        work = tmp_path / "work"
        work.mkdir()
        home_config = isolated_environment / ".mdpreview.yml"
        home_config.write_text("theme: true\n")

        # The home directory sits beside, not above, the work directory
        assert discover_config_file(work) == home_config


@pytest.mark.unit
class TestPriority:
    """Test explicit path, environment and discovery priority."""

    def test_explicit_path_wins(self, tmp_path: Path, monkeypatch) -> None:
        """Test an explicit path beats the environment variable."""
        explicit = tmp_path / "explicit.toml"
        explicit.write_text("theme = true\n")
        from_env = tmp_path / "env.toml"
        from_env.write_text("theme = false\n")
        monkeypatch.setenv("MDPREVIEW_CONFIG", str(from_env))

        config, path = load_config_with_priority(explicit_path=explicit)
        assert config == {"theme": True}
        assert path == explicit

    def test_environment_variable(self, tmp_path: Path, monkeypatch) -> None:
        """Test the environment variable beats discovery."""
        from_env = tmp_path / "env.json"
        from_env.write_text('{"theme": "ArcticMint"}')
        (tmp_path / ".mdpreview.toml").write_text("theme = true\n")
        monkeypatch.setenv("MDPREVIEW_CONFIG", str(from_env))

        config, path = load_config_with_priority(start_dir=tmp_path)
        assert config == {"theme": "ArcticMint"}
        assert path == from_env

    def test_nothing_found(self, tmp_path: Path) -> None:
        """Test an empty configuration when no file exists."""
        work = tmp_path / "empty"
        work.mkdir()
        config, path = load_config_with_priority(start_dir=work)
        if path is None:
            assert config == {}


@pytest.mark.unit
class TestMergeConfigs:
    """Test deep merging."""

    def test_nested_merge(self) -> None:
        """Test nested tables merge and scalars are overridden."""
        base = {"theme": False, "session": {"debounce_ms": 300, "sync_scroll": True}}
        override = {"theme": True, "session": {"debounce_ms": 100}}
        assert merge_configs(base, override) == {"theme": True, "session": {"debounce_ms": 100, "sync_scroll": True}}

    def test_inputs_not_modified(self) -> None:
        """Test merging leaves the inputs untouched."""
        base = {"session": {"debounce_ms": 300}}
        merge_configs(base, {"session": {"debounce_ms": 100}})
        assert base == {"session": {"debounce_ms": 300}}


@pytest.mark.unit
class TestOptionsFromConfig:
    """Test building options objects from a mapping."""

    def test_defaults(self) -> None:
        """Test an empty mapping gives default options."""
        config = options_from_config({})
        assert config == PreviewConfig()

    def test_sections(self) -> None:
        """Test each section reaches its options class."""
        config = options_from_config(
            {
                "theme": "midnight-purple",
                "preview": {"heading_font_sizes": [30, 26, 22, 19, 17, 15], "bullet_glyph": "-"},
                "session": {"debounce_ms": 150, "render_mode": "read", "read_width": 75},
                "markdown": {"parse_math": False},
            }
        )
        assert config.theme == Theme.MIDNIGHT_PURPLE
        assert config.preview.heading_font_sizes == (30, 26, 22, 19, 17, 15)
        assert config.preview.bullet_glyph == "-"
        assert config.session.debounce_ms == 150
        assert config.session.read_width == "75"
        assert config.session.read_max_width == 675.0
        assert not config.markdown.parse_math

    @pytest.mark.parametrize(
        "config",
        [
            {"unknown": 1},
            {"preview": {"no_such_option": 1}},
            {"preview": "not a table"},
            {"session": {"debounce_ms": 5}},
            {"session": {"render_mode": "print"}},
            {"theme": "NoSuchTheme"},
            {"theme": 3},
        ],
    )
    def test_invalid(self, config: dict) -> None:
        """Test unknown keys and invalid values raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            options_from_config(config)


@pytest.mark.unit
class TestLoadOptions:
    """Test the one-step loader."""

    def test_file_and_overrides(self, tmp_path: Path) -> None:
        """Test overrides are merged over the loaded file."""
        path = tmp_path / "config.yaml"
        path.write_text("theme: PureDark\nsession:\n  debounce_ms: 500\n  sync_scroll: false\n")

        config = load_options(path, overrides={"session": {"debounce_ms": 50}})
        assert config.theme == Theme.PURE_DARK
        assert config.session.debounce_ms == 50
        assert config.session.sync_scroll is False
        assert config.source == path
