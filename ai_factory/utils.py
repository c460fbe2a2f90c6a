import json
import re
import shutil
from pathlib import Path
from typing import Any


_SLUG_RE = re.compile(r"[^a-z0-9]+")


def read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def read_json_safe(path: Path) -> tuple[Any | None, str | None]:
    if not path.exists():
        return None, None
    if path.stat().st_size == 0:
        return None, None
    try:
        return read_json(path), None
    except (OSError, ValueError) as exc:
        return None, str(exc)


def write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, sort_keys=False)
        handle.write("\n")


def read_text(path: Path) -> str | None:
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8")


def write_text(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def copy_directory(source: Path, target: Path) -> None:
    shutil.copytree(source, target, dirs_exist_ok=True)


def list_directories(path: Path) -> list[str]:
    """Return sorted names of direct subdirectories, raising if ``path`` is missing."""
    return sorted(entry.name for entry in path.iterdir() if entry.is_dir())


def slugify(value: str) -> str:
    return _SLUG_RE.sub("-", value.lower()).strip("-")

