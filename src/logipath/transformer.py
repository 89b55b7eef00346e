"""Logical path → file-system path transform.

A single mapping rule pairs a logical prefix (e.g. the namespace ``\\Acme\\Blog``)
with a file-system base (e.g. ``/src/``). ``transform`` converts any logical
path under that prefix into the matching file-system path, or returns a
``NotApplicable`` outcome when the prefix does not cover it.

Pure string manipulation: no I/O, no environment lookups. The file-system
separator is always passed in explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass

from logipath.config import DEFAULT_FS_SEP


@dataclass(frozen=True)
class NotApplicable:
    """The mapping rule does not cover ``source``."""

    source: str
    logical_base: str

    def __str__(self) -> str:
        return f"{self.source!r} is not under {self.logical_base!r}"


def is_applicable(result: str | NotApplicable) -> bool:
    """True when ``result`` is a file-system path rather than NotApplicable."""
    return not isinstance(result, NotApplicable)


def transform(
    source: str,
    logical_base: str,
    logical_sep: str,
    fs_base: str,
    *,
    fs_sep: str = DEFAULT_FS_SEP,
    file_ext: str | None = None,
) -> str | NotApplicable:
    """Transform ``source`` into a file-system path under ``fs_base``.

    Steps, in order:

    1. ``source == logical_base`` → ``fs_base`` verbatim (directory or file).
    2. Append ``logical_sep`` to ``logical_base`` unless it is the bare root.
    3. Exact prefix comparison; mismatch → ``NotApplicable``.
    4. Strip trailing ``fs_sep`` from ``fs_base`` and add exactly one back.
    5. Replace ``logical_sep`` with ``fs_sep`` in the remaining suffix and
       append ``file_ext`` if given.

    Raises ValueError when either separator is empty.
    """
    if not logical_sep:
        raise ValueError("logical_sep must be a non-empty string")
    if not fs_sep:
        raise ValueError("fs_sep must be a non-empty string")

    if source == logical_base:
        return fs_base

    prefix = logical_base if logical_base == logical_sep else logical_base + logical_sep
    if not source.startswith(prefix):
        return NotApplicable(source=source, logical_base=logical_base)

    suffix = source[len(prefix):]
    base = _rstrip_all(fs_base, fs_sep)
    path = base + fs_sep + suffix.replace(logical_sep, fs_sep)
    if file_ext:
        path += file_ext
    return path


def _rstrip_all(value: str, sep: str) -> str:
    # Whole occurrences only; str.rstrip would treat sep as a character set.
    while value.endswith(sep):
        value = value[: -len(sep)]
    return value
