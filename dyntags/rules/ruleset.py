#!/usr/bin/env python3
"""Rule-set documents: loading, saving and conversion.

A settings document holds the ordered rules and the host options::

    version: "1.0"
    rules:
      - id: projects
        name: Projects
        enabled: true
        priority: 1
        direction: bidirectional
        folderPattern: Projects/**
        tagPattern: projects/**
        options: {}
    options:
      syncOnCreate: true

Files ending in ``.json`` are read and written as JSON, everything else
as YAML.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple, Union

import yaml

from dyntags.core.config import ConfigError
from dyntags.core.constants import DEFAULT_CONFIG, DEFAULT_OPTIONS, ConfigKey, ErrorCode
from dyntags.core.validators import ValidationError, validate_settings
from dyntags.rules.models import Rule

# Top-level keys a settings document may carry
KNOWN_KEYS = tuple(DEFAULT_CONFIG)


@dataclass(frozen=True)
class RuleSet:
    """Ordered rules plus host options."""

    rules: Tuple[Rule, ...] = ()
    options: Dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_OPTIONS))

    def __post_init__(self):
        object.__setattr__(self, "rules", tuple(self.rules))

    def get(self, rule_id: str) -> Optional[Rule]:
        """Return the rule with this ID, or None."""
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        return None

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)


def rule_set_from_dict(data: Dict[str, Any]) -> RuleSet:
    """Build a RuleSet from a settings document.

    Options missing from the document take their default values.

    Raises:
        ConfigError: If the document or any rule is malformed
    """
    if data is None:
        data = {}

    try:
        validate_settings(data)
    except ValidationError as e:
        raise ConfigError(e.message, e.error_code)

    unknown = sorted(set(data) - set(KNOWN_KEYS))
    if unknown:
        raise ConfigError(f"Unknown settings key(s): {', '.join(unknown)}")

    rules = []
    for i, rule_data in enumerate(data.get(ConfigKey.RULES) or []):
        try:
            rules.append(Rule.from_dict(rule_data))
        except ValidationError as e:
            raise ConfigError(f"Invalid rule at index {i}: {e.message}", e.error_code)

    options = dict(DEFAULT_OPTIONS)
    options.update(data.get(ConfigKey.OPTIONS) or {})

    return RuleSet(rules=tuple(rules), options=options)


def rule_set_to_dict(rule_set: RuleSet) -> Dict[str, Any]:
    """Convert a RuleSet to a settings document."""
    return {
        ConfigKey.VERSION: DEFAULT_CONFIG[ConfigKey.VERSION],
        ConfigKey.RULES: [rule.to_dict() for rule in rule_set.rules],
        ConfigKey.OPTIONS: dict(rule_set.options),
    }


def _is_json(path: Path) -> bool:
    return path.suffix.lower() == ".json"


def load_rule_set(file_path: Union[str, Path]) -> RuleSet:
    """Load a rule set from a YAML or JSON file.

    Raises:
        ConfigError: If the file is missing, unparsable or malformed
    """
    path = Path(file_path).expanduser()

    if not path.exists():
        raise ConfigError(f"Settings file not found: {file_path}", ErrorCode.NOT_FOUND)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f) if _is_json(path) else yaml.safe_load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"JSON parse error in {file_path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML parse error in {file_path}: {e}")
    except OSError as e:
        raise ConfigError(f"Error reading {file_path}: {e}", ErrorCode.INTERNAL_ERROR)

    if data is not None and not isinstance(data, dict):
        raise ConfigError(f"Invalid settings format in {file_path}")

    return rule_set_from_dict(data)


def dump_rule_set(rule_set: RuleSet, file_path: Union[str, Path]) -> None:
    """Write a rule set to a YAML or JSON file.

    Raises:
        ConfigError: If the file cannot be written
    """
    path = Path(file_path).expanduser()
    data = rule_set_to_dict(rule_set)

    try:
        with open(path, "w", encoding="utf-8") as f:
            if _is_json(path):
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.write("\n")
            else:
                yaml.safe_dump(data, f, sort_keys=False, allow_unicode=True)
    except OSError as e:
        raise ConfigError(f"Error writing {file_path}: {e}", ErrorCode.INTERNAL_ERROR)
