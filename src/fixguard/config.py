"""
Configuration for fixguard.

Defaults for the classifier, the validator and the fixer registry, plus a
hierarchical loader for user overrides:
- Global: ~/.fixguard/config.json
- Local: <project>/.fixguard/config.json
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

from fixguard.exceptions import ConfigError
from fixguard.logging_config import logger


CLASSIFIER_CONFIG = {
    "max_cache_size": 1000,
    # A slash after one of these characters starts a regex literal
    "regex_preceders": "([{,;:!&|?+-*/%=<>^~",
    # ...or after one of these keywords
    "regex_keywords": (
        "return", "throw", "case", "in", "of",
        "delete", "void", "typeof", "new", "instanceof",
    ),
}

VALIDATION_CONFIG = {
    "language": "javascript",
    "history_limit": 100,
    "line_delta_threshold": 10,
    "tracked_keywords": (
        "function", "class", "const", "let", "var", "if", "for", "while",
    ),
}

SUPPORTED_LANGUAGES = {
    "javascript": [".js", ".jsx", ".mjs", ".cjs"],
    "typescript": [".ts"],
    "tsx": [".tsx"],
}

DEFAULT_CONFIG = {
    "classifier": CLASSIFIER_CONFIG,
    "validation": VALIDATION_CONFIG,
}


def detect_language(path: Path) -> Optional[str]:
    """Detect language from file extension."""
    suffix = path.suffix.lower()
    for language, extensions in SUPPORTED_LANGUAGES.items():
        if suffix in extensions:
            return language
    return None


def load_config(project_root: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration with hierarchical override.

    Load order (with override):
    1. Default config (hardcoded)
    2. Global config (~/.fixguard/config.json)
    3. Local config (<project_root>/.fixguard/config.json)

    Args:
        project_root: Project root directory (defaults to CWD)

    Returns:
        Merged configuration dictionary

    Raises:
        ConfigError: If a config file exists but is not valid JSON
    """
    project_root = project_root or Path.cwd()
    config = copy.deepcopy(DEFAULT_CONFIG)

    for config_path in (
        Path.home() / ".fixguard" / "config.json",
        project_root / ".fixguard" / "config.json",
    ):
        if not config_path.exists():
            continue
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                overrides = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

        if not isinstance(overrides, dict):
            raise ConfigError(f"Config root in {config_path} must be an object")

        config = _deep_merge(config, overrides)
        logger.debug(f"Loaded config overrides from {config_path}")

    return config


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
