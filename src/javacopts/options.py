"""Builder for the option tokens handed to an in-memory ``javac`` invocation.

Options are kept as a flat list of strings in the order they would appear on
a ``javac`` command line.  A flag's value is simply the token that follows it.

Usage::

    from javacopts.options import OptionsBuilder

    provider = (
        OptionsBuilder()
        .set_classpath("lib/antlr.jar")
        .set_classpath("build/classes")
        .set_release("17")
        .build()
    )
    provider.options   # ["-classpath", "lib/antlr.jar:build/classes", "--release", "17"]

The provider returned by :meth:`OptionsBuilder.build` shares the builder's
list: later builder calls are visible through it.  Use
:meth:`OptionsProvider.snapshot` for a frozen copy.
"""

from __future__ import annotations

import os
import warnings
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from javacopts.config import ProjectConfig

# Equivalent spellings of the classpath flag, matched exactly.
CLASSPATH_FLAGS: tuple[str, ...] = ("-classpath", "-cp", "--class-path", "--classpath")
DEFAULT_CLASSPATH_FLAG = "-classpath"

RELEASE_FLAG = "--release"
SOURCE_FLAG = "-source"
TARGET_FLAG = "-target"

ReleaseProbe = Callable[[], bool]


# ---------------------------------------------------------------------------
# Token list helpers
# ---------------------------------------------------------------------------


def _index_of(opts: list[str], token: str) -> int:
    try:
        return opts.index(token)
    except ValueError:
        return -1


def find_classpath_flag_index(opts: list[str]) -> int:
    """Return the position of the first classpath flag in *opts*, or ``-1``.

    Any spelling in :data:`CLASSPATH_FLAGS` counts.  If several spellings are
    present only the earliest is used, and a warning is emitted.
    """
    hits = [i for i, tok in enumerate(opts) if tok in CLASSPATH_FLAGS]
    if not hits:
        return -1
    spellings = {opts[i] for i in hits}
    if len(spellings) > 1:
        warnings.warn(
            f"Multiple classpath flags present ({', '.join(sorted(spellings))}); "
            f"merging into {opts[hits[0]]!r} at position {hits[0]}.",
            stacklevel=3,
        )
    return hits[0]


def set_or_replace(opts: list[str], flag: str, value: str) -> None:
    """Overwrite the value after *flag*, or append ``flag value``."""
    idx = _index_of(opts, flag)
    if idx < 0:
        opts.extend((flag, value))
    elif idx + 1 < len(opts):
        opts[idx + 1] = value
    else:
        # Flag is the last token: supply the missing value
        opts.append(value)


def remove_flag_and_value(opts: list[str], flag: str) -> None:
    """Delete *flag* and the token that followed it, if any."""
    idx = _index_of(opts, flag)
    if idx < 0:
        return
    del opts[idx]
    if idx < len(opts):
        del opts[idx]


# ---------------------------------------------------------------------------
# Provider
# ---------------------------------------------------------------------------


class OptionsProvider:
    """Exposes the assembled option tokens to whatever runs the compiler."""

    def __init__(self, options: list[str] | None = None) -> None:
        self._options: list[str] = options if options is not None else []

    @property
    def options(self) -> list[str]:
        """The live token list (not a copy)."""
        return self._options

    def get_options(self) -> list[str]:
        return self._options

    @property
    def classpath(self) -> list[str]:
        """Same live list as :attr:`options`; pairs with :meth:`add_classpath`."""
        return self._options

    def add_option(self, option: str) -> None:
        """Append one token as it would appear on the ``javac`` command line."""
        self._options.append(option)

    def add_classpath(self, tokens: Iterable[str]) -> None:
        """Bulk-append raw tokens, e.g. ``["-cp", "lib/x.jar"]``.

        Tokens are appended verbatim.  Unlike
        :meth:`OptionsBuilder.set_classpath` nothing is merged, so appending a
        second classpath flag here produces a duplicate.
        """
        self._options.extend(tokens)

    def snapshot(self) -> tuple[str, ...]:
        """Return an immutable copy of the current tokens."""
        return tuple(self._options)

    def __iter__(self) -> Iterator[str]:
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __repr__(self) -> str:
        return f"OptionsProvider({self._options!r})"


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


class OptionsBuilder:
    """Chainable builder for ``javac`` option tokens.

    Every setter ignores empty or ``None`` values and never raises.

    Args:
        release_probe: Zero-argument callable answering "does the runtime
            accept ``--release``?".  Defaults to
            :func:`javacopts.runtime.default_release_probe`.
        path_separator: Separator used when merging classpath entries.
            Defaults to :data:`os.pathsep`.
    """

    def __init__(
        self,
        release_probe: ReleaseProbe | None = None,
        path_separator: str = os.pathsep,
    ) -> None:
        if release_probe is None:
            from javacopts.runtime import default_release_probe

            release_probe = default_release_probe
        self._release_probe = release_probe
        self._sep = path_separator
        self._provider = OptionsProvider()

    @property
    def tokens(self) -> list[str]:
        """The live token list shared with the provider."""
        return self._provider.options

    def set_classpath(self, classpath: str | None) -> OptionsBuilder:
        """Add or extend the classpath option.

        Without an existing classpath flag, ``-classpath <classpath>`` is
        appended.  Otherwise *classpath* is joined onto the value of whichever
        spelling is already present, and that spelling is kept.
        """
        if not classpath:
            return self

        opts = self._provider.options
        idx = find_classpath_flag_index(opts)
        if idx < 0:
            opts.extend((DEFAULT_CLASSPATH_FLAG, classpath))
            return self

        value_idx = idx + 1
        if value_idx >= len(opts):
            opts.insert(value_idx, classpath)
            return self

        old = opts[value_idx]
        if not old:
            opts[value_idx] = classpath
        elif old.endswith(self._sep):
            opts[value_idx] = old + classpath
        else:
            opts[value_idx] = old + self._sep + classpath
        return self

    def set_release(self, release: str | None) -> OptionsBuilder:
        """Prefer ``--release`` where supported, else ``-source``/``-target``.

        ``--release`` pins language level, bytecode target and platform API
        together, so any ``-source``/``-target`` pair is removed first.
        """
        if not release:
            return self

        opts = self._provider.options
        if self._release_probe():
            remove_flag_and_value(opts, SOURCE_FLAG)
            remove_flag_and_value(opts, TARGET_FLAG)
            set_or_replace(opts, RELEASE_FLAG, release)
        else:
            set_or_replace(opts, SOURCE_FLAG, release)
            set_or_replace(opts, TARGET_FLAG, release)
        return self

    def set_source(self, version: str | None) -> OptionsBuilder:
        if not version:
            return self
        opts = self._provider.options
        # --release stays the single source of truth once set
        if RELEASE_FLAG in opts:
            return self
        set_or_replace(opts, SOURCE_FLAG, version)
        return self

    def set_target(self, version: str | None) -> OptionsBuilder:
        if not version:
            return self
        opts = self._provider.options
        if RELEASE_FLAG in opts:
            return self
        set_or_replace(opts, TARGET_FLAG, version)
        return self

    def build(self) -> OptionsProvider:
        """Return the provider backed by this builder's live token list."""
        return self._provider


def builder_from_config(
    cfg: ProjectConfig,
    release_probe: ReleaseProbe | None = None,
) -> OptionsBuilder:
    """Create a builder pre-populated from a ``javacopts.toml`` config.

    Raw ``extra`` tokens are seeded first, then classpath entries are merged
    in order, then release, source and target are applied.
    """
    builder = OptionsBuilder(release_probe=release_probe or cfg.release_probe())
    builder.build().add_classpath(cfg.extra)
    for entry in cfg.classpath:
        builder.set_classpath(entry)
    builder.set_release(cfg.release)
    builder.set_source(cfg.source)
    builder.set_target(cfg.target)
    return builder
