"""Tests for project config migration and persistence."""

import json
from pathlib import Path

import pytest

from ai_factory import __version__
from ai_factory.config import (
    config_exists,
    create_default_config,
    get_config_path,
    get_current_version,
    load_config,
    migrate_config,
    save_config,
)
from ai_factory.errors import InvalidConfigSchemaError, InvalidJsonFormatError
from ai_factory.models import McpOptions


ALL_OFF = {"github": False, "filesystem": False, "postgres": False, "chromeDevtools": False}


def test_current_version_matches_package() -> None:
    assert get_current_version() == __version__


def test_default_config_uses_agent_skills_dir() -> None:
    config = create_default_config("opencode")
    assert config.agent == "opencode"
    assert config.skills_dir == ".opencode/skill"
    assert config.installed_skills == []
    assert config.mcp.as_dict() == ALL_OFF


def test_default_config_with_unknown_agent_falls_back() -> None:
    assert create_default_config("notepad").agent == "claude"


@pytest.mark.parametrize("payload", [{}, None, "junk", [1, 2]])
def test_migrate_is_total(payload) -> None:
    config = migrate_config(payload)
    assert config.as_dict() == {
        "version": __version__,
        "agent": "claude",
        "skillsDir": ".claude/skills",
        "installedSkills": [],
        "mcp": ALL_OFF,
    }


def test_migrate_coerces_unknown_agent() -> None:
    config = migrate_config({"agent": "notepad", "installedSkills": ["alpha"]})
    assert config.agent == "claude"
    assert config.installed_skills == ["alpha"]


def test_migrate_normalizes_agent_case() -> None:
    assert migrate_config({"agent": "Cursor"}).agent == "cursor"
    assert migrate_config({"agent": "Cursor"}).skills_dir == ".cursor/rules"


def test_migrate_keeps_present_fields() -> None:
    config = migrate_config(
        {
            "agent": "gemini",
            "skillsDir": "custom/skills",
            "installedSkills": ["alpha", "web/api", "alpha"],
        }
    )
    assert config.agent == "gemini"
    assert config.skills_dir == "custom/skills"
    assert config.installed_skills == ["alpha", "web/api", "alpha"]
    assert config.custom_skills == ["web/api"]


def test_migrate_coerces_bad_shapes() -> None:
    config = migrate_config(
        {"skillsDir": 5, "installedSkills": "alpha", "mcp": ["github"]}
    )
    assert config.skills_dir == ".claude/skills"
    assert config.installed_skills == []
    assert config.mcp.as_dict() == ALL_OFF

    filtered = migrate_config({"installedSkills": ["alpha", 3, None, "beta"]})
    assert filtered.installed_skills == ["alpha", "beta"]


def test_partial_mcp_flags_keep_siblings() -> None:
    merged = McpOptions.from_mapping({"github": True}, defaults=McpOptions(filesystem=True))
    assert merged.as_dict() == {
        "github": True,
        "filesystem": True,
        "postgres": False,
        "chromeDevtools": False,
    }

    config = migrate_config({"mcp": {"github": True, "bogus": True}})
    assert config.mcp.as_dict() == {**ALL_OFF, "github": True}


def test_non_boolean_mcp_flags_keep_defaults() -> None:
    config = migrate_config(
        {"mcp": {"github": "false", "filesystem": 1, "postgres": True, "chromeDevtools": None}}
    )
    assert config.mcp.as_dict() == {**ALL_OFF, "postgres": True}

    merged = McpOptions.from_mapping({"github": "no"}, defaults=McpOptions(github=True))
    assert merged.github is True


def test_migrate_forces_version() -> None:
    assert migrate_config({"version": "0.0.1"}).version == __version__


def test_migrate_drops_unknown_keys() -> None:
    config = migrate_config({"agent": "claude", "legacy": True, "theme": "dark"})
    assert set(config.as_dict()) == {"version", "agent", "skillsDir", "installedSkills", "mcp"}


def test_load_missing_config_returns_none(tmp_path: Path) -> None:
    assert load_config(tmp_path) is None
    assert not config_exists(tmp_path)


def test_load_empty_file_returns_none(tmp_path: Path) -> None:
    get_config_path(tmp_path).write_text("", encoding="utf-8")
    assert load_config(tmp_path) is None


def test_load_forces_current_version(tmp_path: Path, write_json) -> None:
    write_json(
        get_config_path(tmp_path),
        {"version": "0.0.1", "agent": "cursor", "mcp": {"postgres": True}},
    )

    config = load_config(tmp_path)

    assert config is not None
    assert config.version == __version__
    assert config.agent == "cursor"
    assert config.mcp.postgres is True
    assert config.mcp.github is False


def test_load_invalid_json_raises(tmp_path: Path) -> None:
    get_config_path(tmp_path).write_text("{not-json", encoding="utf-8")
    with pytest.raises(InvalidJsonFormatError) as excinfo:
        load_config(tmp_path)
    assert str(get_config_path(tmp_path)) in str(excinfo.value)


def test_load_non_object_raises(tmp_path: Path, write_json) -> None:
    write_json(get_config_path(tmp_path), ["claude"])
    with pytest.raises(InvalidConfigSchemaError):
        load_config(tmp_path)


def test_save_writes_full_object(tmp_path: Path) -> None:
    config = create_default_config("claude")
    config.installed_skills = ["alpha", "web/api"]
    config.mcp = McpOptions(github=True, chrome_devtools=True)

    save_config(tmp_path, config)

    text = get_config_path(tmp_path).read_text(encoding="utf-8")
    assert text.endswith("}\n")
    assert json.loads(text) == {
        "version": __version__,
        "agent": "claude",
        "skillsDir": ".claude/skills",
        "installedSkills": ["alpha", "web/api"],
        "mcp": {"github": True, "filesystem": False, "postgres": False, "chromeDevtools": True},
    }
    assert config_exists(tmp_path)
    assert load_config(tmp_path) == config
