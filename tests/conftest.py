import json
import sys
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def write_json():
    def _write(path: Path, payload: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")

    return _write


@pytest.fixture
def make_skill():
    def _make(
        root: Path,
        name: str,
        content: str | None,
        assets: dict[str, str] | None = None,
    ) -> Path:
        skill_dir = root / name
        skill_dir.mkdir(parents=True, exist_ok=True)
        if content is not None:
            (skill_dir / "SKILL.md").write_text(content, encoding="utf-8")
        for rel, text in (assets or {}).items():
            asset = skill_dir / rel
            asset.parent.mkdir(parents=True, exist_ok=True)
            asset.write_text(text, encoding="utf-8")
        return skill_dir

    return _make


@pytest.fixture
def catalog_root(tmp_path: Path, make_skill) -> Path:
    root = tmp_path / "catalog"
    make_skill(
        root,
        "alpha",
        "---\nname: alpha\ndescription: Alpha skill\n---\n\n# Alpha\n\nUse {{agent_name}}.\n",
        assets={"notes.md": "Notes for {{agent_name}}.\n", "data.json": '{"x": "{{agent_name}}"}\n'},
    )
    make_skill(root, "beta", None, assets={"README.txt": "no skill file\n"})
    make_skill(root, "gamma", "# Gamma\n\nPlain body without front-matter.\n")
    make_skill(
        root / "_templates" / "web",
        "api",
        "---\nname: api\ndescription: API skill\n---\n\nBuild APIs in {{config_dir}}.\n",
    )
    make_skill(
        root / "_templates" / "web",
        "ui",
        "---\nname: ui\ndescription: UI skill\n---\n\nBuild UIs.\n",
    )
    return root


@pytest.fixture
def catalog(catalog_root: Path):
    from ai_factory.skills.catalog import SkillCatalog

    return SkillCatalog(catalog_root)


@pytest.fixture
def installer(catalog):
    from ai_factory.skills.installer import SkillInstaller

    return SkillInstaller(catalog)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    path = tmp_path / "project"
    path.mkdir()
    return path


@pytest.fixture
def mcp_templates_dir(tmp_path: Path, write_json) -> Path:
    root = tmp_path / "mcp-templates"
    write_json(
        root / "github.json",
        {
            "command": "npx",
            "args": ["-y", "@modelcontextprotocol/server-github"],
            "env": {"GITHUB_PERSONAL_ACCESS_TOKEN": "${GITHUB_TOKEN}"},
        },
    )
    write_json(
        root / "filesystem.json",
        {"command": "npx", "args": ["-y", "@modelcontextprotocol/server-filesystem", "."]},
    )
    return root


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            env.setdefault("COLUMNS", "200")
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()


@pytest.fixture
def snapshot_tree():
    def _snapshot(root: Path) -> dict[str, bytes]:
        return {
            str(path.relative_to(root)): path.read_bytes()
            for path in sorted(root.rglob("*"))
            if path.is_file()
        }

    return _snapshot
