"""Shared pytest fixtures for dyntags tests."""
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Generator, List, Tuple
from unittest.mock import MagicMock

import pytest
import yaml

from dyntags.core import logging as dyntags_logging
from dyntags.core.logging import Logger, LogLevel
from dyntags.rules.models import RegexTransform, Rule, TransformConfig
from dyntags.rules.patterns import clear_pattern_cache


@pytest.fixture(autouse=True)
def reset_pattern_cache() -> Generator[None, None, None]:
    """Start every test with an empty compiled-pattern cache."""
    clear_pattern_cache()
    yield
    clear_pattern_cache()


@pytest.fixture
def captured_logger() -> Generator[Tuple[Logger, MagicMock], None, None]:
    """Install a DEBUG global logger whose only handler is a mock."""
    previous = dyntags_logging._global_logger

    handler = MagicMock(spec=logging.Handler)
    handler.level = logging.DEBUG
    logger = Logger(name="dyntags", level=LogLevel.DEBUG, handlers=[handler])
    dyntags_logging.set_global_logger(logger)

    yield logger, handler

    dyntags_logging._global_logger = previous


@pytest.fixture
def log_messages(captured_logger) -> Callable[[], List[str]]:
    """Return a callable listing the messages logged so far, in order."""
    _, handler = captured_logger

    def messages() -> List[str]:
        return [call.args[0].getMessage() for call in handler.handle.call_args_list]

    return messages


@pytest.fixture
def tag_transforms() -> TransformConfig:
    """Folder -> tag transforms used by most mapping tests."""
    return TransformConfig(
        case_transform="kebab-case",
        emoji_handling="strip",
        number_prefix_handling="strip",
        custom_transforms=(RegexTransform(pattern=r"[^a-z0-9\-/]", replacement="", flags="gi"),),
    )


@pytest.fixture
def folder_transforms() -> TransformConfig:
    """Tag -> folder transforms used by most mapping tests."""
    return TransformConfig(case_transform="Title Case")


@pytest.fixture
def projects_rule(tag_transforms, folder_transforms) -> Rule:
    """Bidirectional rule for the Projects area."""
    return Rule(
        id="projects",
        name="Projects",
        priority=1,
        direction="bidirectional",
        folder_pattern="Projects/**",
        folder_entry_point="Projects",
        folder_transforms=folder_transforms,
        tag_pattern="projects/**",
        tag_entry_point="projects",
        tag_transforms=tag_transforms,
    )


@pytest.fixture
def sample_rules(projects_rule) -> List[Rule]:
    """A small ordered rule set."""
    return [
        projects_rule,
        Rule(
            id="inbox",
            name="Inbox",
            priority=0,
            direction="bidirectional",
            folder_pattern="Inbox",
            tag_pattern="inbox",
        ),
        Rule(
            id="archive",
            name="Archive",
            priority=5,
            direction="folder-to-tag",
            folder_pattern="Archive/**",
            folder_entry_point="Archive",
            tag_entry_point="archive",
            tag_transforms=TransformConfig(case_transform="snake_case"),
        ),
        Rule(
            id="disabled",
            name="Disabled",
            enabled=False,
            priority=0,
            folder_pattern="**",
            tag_pattern="**",
        ),
    ]


@pytest.fixture
def settings_data(sample_rules) -> Dict[str, Any]:
    """Settings document holding the sample rules."""
    return {
        "version": "1.0",
        "rules": [rule.to_dict() for rule in sample_rules],
        "options": {"syncOnCreate": False, "showNotifications": True},
    }


@pytest.fixture
def settings_file(tmp_path: Path, settings_data) -> Path:
    """Settings document written as YAML."""
    path = tmp_path / "dyntags.yaml"
    path.write_text(yaml.safe_dump(settings_data, sort_keys=False, allow_unicode=True), encoding="utf-8")
    return path
