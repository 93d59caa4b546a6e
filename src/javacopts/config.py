"""Project configuration loader for javacopts.

Reads ``javacopts.toml`` from the project root and exposes the default
compiler options as simple attributes.

Example file::

    [java]
    launcher = "/opt/jdk-17/bin/java"   # probed for java.specification.version
    spec_version = "17"                 # skip probing entirely

    [options]
    classpath = ["lib/antlr4-runtime.jar", "build/classes"]
    release = "17"
    extra = ["-g", "-Xlint:all"]

Usage::

    from javacopts.config import load_config
    from javacopts.options import builder_from_config

    cfg = load_config()
    tokens = builder_from_config(cfg).build().options
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, List, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import,no-redef]

from javacopts.runtime import fixed_release_probe, launcher_release_probe

CONFIG_FILENAME = "javacopts.toml"


@dataclass
class ProjectConfig:
    """Parsed project configuration."""

    # Directory holding javacopts.toml; relative classpath entries resolve here
    root: Path

    # --- [java] ---
    launcher: Optional[str] = None
    spec_version: Optional[str] = None

    # --- [options] ---
    classpath: List[str] = field(default_factory=list)
    release: Optional[str] = None
    source: Optional[str] = None
    target: Optional[str] = None
    extra: List[str] = field(default_factory=list)

    def release_probe(self) -> Callable[[], bool]:
        """Probe honouring ``spec_version`` first, then ``launcher``."""
        if self.spec_version:
            return fixed_release_probe(self.spec_version)
        return launcher_release_probe(self.launcher)


def _resolve(root: Path, rel: str) -> str:
    """Resolve a classpath entry relative to the project root."""
    p = Path(rel)
    if p.is_absolute():
        return rel
    return str(root / p)


def _find_root(start: Optional[Path] = None) -> Path:
    """Walk up from *start* (or cwd) to find javacopts.toml."""
    if start is not None:
        return start
    candidate = Path.cwd().resolve()
    while candidate != candidate.parent:
        if (candidate / CONFIG_FILENAME).exists():
            return candidate
        candidate = candidate.parent
    raise FileNotFoundError(
        f"Could not find {CONFIG_FILENAME} in any parent of the current directory."
    )


def _table(raw: dict[str, Any], name: str) -> dict[str, Any]:
    value = raw.get(name, {})
    if not isinstance(value, dict):
        raise ValueError(f"[{name}] must be a table, got {type(value).__name__}")
    return value


def _opt_str(table: dict[str, Any], key: str, section: str) -> Optional[str]:
    value = table.get(key)
    if value is None:
        return None
    # Versions are often written bare: release = 17
    if isinstance(value, (str, int)) and not isinstance(value, bool):
        return str(value)
    raise ValueError(f"[{section}] {key} must be a string, got {type(value).__name__}")


def _str_list(table: dict[str, Any], key: str, section: str) -> List[str]:
    value = table.get(key, [])
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"[{section}] {key} must be a list of strings")
    return list(value)


def load_config(root: Optional[Path] = None) -> ProjectConfig:
    """Load javacopts.toml.

    Args:
        root: Directory containing the file.  Auto-detected if ``None``.

    Raises:
        FileNotFoundError: No config file was found.
        ValueError: The file is not valid TOML or a field has the wrong type.
    """
    root = _find_root(root)
    toml_path = root / CONFIG_FILENAME
    if not toml_path.exists():
        raise FileNotFoundError(f"Config not found: {toml_path}")

    try:
        with open(toml_path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"{toml_path}: {exc}") from exc

    java = _table(raw, "java")
    options = _table(raw, "options")

    return ProjectConfig(
        root=root,
        launcher=_opt_str(java, "launcher", "java"),
        spec_version=_opt_str(java, "spec_version", "java"),
        classpath=[_resolve(root, e) for e in _str_list(options, "classpath", "options") if e],
        release=_opt_str(options, "release", "options"),
        source=_opt_str(options, "source", "options"),
        target=_opt_str(options, "target", "options"),
        extra=_str_list(options, "extra", "options"),
    )
