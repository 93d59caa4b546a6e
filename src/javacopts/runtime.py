"""Java runtime probing: does the active JDK accept ``--release``?

``--release`` exists from JDK 9 onwards.  The answer comes from the
``java.specification.version`` system property, which reads ``1.8`` on
JDK 8 and ``9``, ``11``, ``17`` ... on newer releases.

Lookup order for the version string:

1. ``JAVACOPTS_SPEC_VERSION`` environment variable
2. ``<launcher> -XshowSettings:properties -version``, where the launcher is
   the explicit argument, then ``$JAVA_HOME/bin/java``, then ``java`` on PATH

Anything that goes wrong yields an empty string, which never supports
``--release``.
"""

from __future__ import annotations

import functools
import os
import re
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

RELEASE_MIN_VERSION = 9

SPEC_VERSION_ENV = "JAVACOPTS_SPEC_VERSION"

_PROBE_TIMEOUT_S = 15

_SPEC_VERSION_RE = re.compile(r"^\s*java\.specification\.version\s*=\s*(\S+)\s*$", re.MULTILINE)


def parse_spec_version(text: str | None) -> int | None:
    """Return the major Java version in *text*, or ``None`` if unparsable.

    ``"1.8"`` → 8 (pre-9 scheme), ``"17"`` → 17, ``"11.0.2"`` → 11.
    """
    if not text:
        return None
    parts = text.strip().split(".")
    if len(parts) > 1 and parts[0] == "1":
        major = parts[1]
    else:
        major = parts[0]
    try:
        return int(major)
    except ValueError:
        return None


def supports_release(spec_version: str | None) -> bool:
    """True when *spec_version* is at least :data:`RELEASE_MIN_VERSION`."""
    major = parse_spec_version(spec_version)
    return major is not None and major >= RELEASE_MIN_VERSION


def resolve_java_launcher(java: str | None = None) -> str | None:
    """Locate the ``java`` launcher to probe, or ``None`` if there is none."""
    if java:
        return java
    java_home = os.environ.get("JAVA_HOME", "").strip()
    if java_home:
        candidate = Path(java_home) / "bin" / ("java.exe" if os.name == "nt" else "java")
        if candidate.exists():
            return str(candidate)
    return shutil.which("java")


def java_spec_version(java: str | None = None, *, timeout: int = _PROBE_TIMEOUT_S) -> str:
    """Return ``java.specification.version`` of the active runtime, or ``""``."""
    override = os.environ.get(SPEC_VERSION_ENV, "").strip()
    if override:
        return override

    launcher = resolve_java_launcher(java)
    if launcher is None:
        return ""

    try:
        r = subprocess.run(
            [launcher, "-XshowSettings:properties", "-version"],
            capture_output=True,
            timeout=timeout,
        )
    except (FileNotFoundError, OSError, subprocess.TimeoutExpired):
        return ""

    # The launcher prints settings on stderr
    output = (r.stderr + r.stdout).decode("utf-8", errors="replace")
    m = _SPEC_VERSION_RE.search(output)
    return m.group(1) if m else ""


@functools.lru_cache(maxsize=None)
def _probe_launcher(java: str | None) -> bool:
    return supports_release(java_spec_version(java))


def _release_supported(java: str | None) -> bool:
    # The environment override is read on every call; only launcher runs are cached
    override = os.environ.get(SPEC_VERSION_ENV, "").strip()
    if override:
        return supports_release(override)
    return _probe_launcher(java)


def default_release_probe() -> bool:
    """Release probe against the default launcher, cached per process."""
    return _release_supported(None)


def launcher_release_probe(java: str | None) -> Callable[[], bool]:
    """Return a release probe for a specific launcher (launcher runs are cached)."""
    return functools.partial(_release_supported, java)


def fixed_release_probe(spec_version: str) -> Callable[[], bool]:
    """Return a release probe that answers for a fixed version string."""
    answer = supports_release(spec_version)

    def _probe() -> bool:
        return answer

    return _probe
