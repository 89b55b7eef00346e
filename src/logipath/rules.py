"""Mapping rules — one logical prefix ↔ file-system base, stored as YAML."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from logipath.config import DEFAULT_FS_SEP
from logipath.transformer import NotApplicable, transform

logger = logging.getLogger(__name__)


class RuleError(Exception):
    """Raised when a rule file cannot be read or does not describe a rule."""


class MappingRule(BaseModel):
    """A single logical-prefix → file-system-base mapping."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    logical_base: str
    logical_sep: str = Field(min_length=1)
    fs_base: str
    fs_sep: str = Field(default=DEFAULT_FS_SEP, min_length=1)
    file_ext: str | None = None

    def apply(self, source: str) -> str | NotApplicable:
        return transform(
            source,
            self.logical_base,
            self.logical_sep,
            self.fs_base,
            fs_sep=self.fs_sep,
            file_ext=self.file_ext,
        )

    def covers(self, source: str) -> bool:
        """True if ``source`` falls under this rule's logical base."""
        return not isinstance(self.apply(source), NotApplicable)


def _rule_data(raw: Any, path: Path) -> dict[str, Any]:
    if isinstance(raw, dict) and isinstance(raw.get("rule"), dict):
        raw = raw["rule"]
    if not isinstance(raw, dict):
        raise RuleError(f"Rule file {path} must contain a mapping of rule fields")
    return raw


def load_rule(path: Path) -> MappingRule:
    """Load a single mapping rule from a YAML file.

    The fields may sit at the top level or under a ``rule:`` key.
    Raises RuleError for unreadable files, bad YAML and invalid fields.
    """
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise RuleError(f"Rule file not found: {path}") from e
    except UnicodeDecodeError as e:
        raise RuleError(f"Rule file is not valid UTF-8: {path}") from e
    except OSError as e:
        raise RuleError(f"Cannot read rule file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise RuleError(f"Invalid YAML in {path}: {e}") from e

    data = _rule_data(raw, path)
    try:
        rule = MappingRule.model_validate(data)
    except ValidationError as e:
        raise RuleError(f"Invalid rule in {path}: {e}") from e
    logger.debug("Loaded rule %s → %s from %s", rule.logical_base, rule.fs_base, path)
    return rule


def save_rule(path: Path, rule: MappingRule) -> None:
    """Write ``rule`` to ``path`` as YAML, creating parent directories.

    Raises RuleError when the file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                rule.model_dump(exclude_none=True), f,
                default_flow_style=False, sort_keys=False, allow_unicode=True,
            )
    except OSError as e:
        raise RuleError(f"Cannot write rule file {path}: {e}") from e
    logger.debug("Saved rule %s → %s to %s", rule.logical_base, rule.fs_base, path)
