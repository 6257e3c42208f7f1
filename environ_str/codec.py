"""Parse and format ``environ`` blocks.

An ``environ`` block is a sequence of ``NAME=VALUE`` entries separated by
whitespace (or by an explicit separator such as the NUL byte used in
``/proc/<pid>/environ``). Parsing is lazy and per-entry: a malformed token
produces a ParseEnvVarError in the output stream instead of stopping it, so
the caller decides whether to abort or skip.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator

from .models import EnvVar, ParseEnvVarError

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"\S+")


def parse_env_var(text: str) -> EnvVar:
    """Parse a single ``NAME=VALUE`` entry, splitting on the first ``=``."""
    return EnvVar.parse(text)


def format_env_var(env_var: EnvVar) -> str:
    """Render an EnvVar as ``NAME=VALUE``."""
    return str(env_var)


def _tokens(text: str, sep: str | None) -> Iterator[str]:
    if sep is None:
        for match in _TOKEN_RE.finditer(text):
            yield match.group()
        return
    if not sep:
        raise ValueError("separator must not be empty")
    for token in text.split(sep):
        if token:
            yield token


def parse_environ(
    text: str, sep: str | None = None
) -> Iterator[EnvVar | ParseEnvVarError]:
    """Lazily parse an ``environ`` block.

    Args:
        text: The block to parse.
        sep: Entry separator. None (the default) splits on runs of
            whitespace; any other string splits on exactly that string.
            Empty entries are skipped either way.

    Yields:
        One EnvVar per well-formed entry, or the ParseEnvVarError describing
        why an entry is malformed. Errors are yielded, not raised.
    """
    for token in _tokens(text, sep):
        try:
            yield EnvVar.parse(token)
        except ParseEnvVarError as exc:
            yield exc


def collect_environ(
    text: str, sep: str | None = None, strict: bool = True
) -> list[EnvVar]:
    """Parse a whole ``environ`` block into a list.

    With *strict* the first malformed entry is raised; otherwise malformed
    entries are logged and skipped.

    Raises:
        ParseEnvVarError: On the first malformed entry when *strict* is set.
    """
    env_vars: list[EnvVar] = []
    for result in parse_environ(text, sep=sep):
        if isinstance(result, ParseEnvVarError):
            if strict:
                raise result
            logger.warning("skipping malformed environ entry: %s", result)
            continue
        env_vars.append(result)
    return env_vars


def format_environ(env_vars: Iterable[EnvVar], sep: str = " ") -> str:
    """Render EnvVars as an ``environ`` block joined by *sep*.

    Raises:
        ValueError: If *sep* is empty, or the block would not parse back into
            the same entries: an entry contains the separator (any
            whitespace when *sep* is whitespace), or overlaps a neighbouring
            separator.
    """
    if not sep:
        raise ValueError("separator must not be empty")
    whitespace_sep = sep.isspace()
    env_vars = list(env_vars)
    entries = []
    for env_var in env_vars:
        entry = format_env_var(env_var)
        if whitespace_sep:
            unsafe = any(ch.isspace() for ch in entry)
        else:
            unsafe = sep in entry or _overlaps_separator(entry, sep)
        if unsafe:
            raise ValueError(f"entry collides with the entry separator: {entry!r}")
        entries.append(entry)

    block = sep.join(entries)
    if list(parse_environ(block, sep=None if whitespace_sep else sep)) != env_vars:
        raise ValueError(f"entries do not survive the separator {sep!r}")
    logger.debug("formatted %d environ entries", len(entries))
    return block


def _overlaps_separator(entry: str, sep: str) -> bool:
    # A proper prefix of sep at the end (or proper suffix at the start) can
    # combine with the joining separator into a misplaced split.
    for i in range(1, len(sep)):
        if entry.endswith(sep[:i]) or entry.startswith(sep[i:]):
            return True
    return False
