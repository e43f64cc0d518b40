"""Locate, read, and validate content-source.yaml."""

import logging
import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import ContentSourcesConfig

logger = logging.getLogger(__name__)

PROJECT_CONFIG_NAME = "content-source.yaml"
# Environment variable naming a config file, checked after --config
CONFIG_PATH_ENV = "CONTENT_SOURCE_CONFIG"

# ${VAR} or ${VAR:-fallback}
_ENV_REF_RE = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def config_search_paths(cli_path: str | None = None) -> list[Path]:
    """Candidate files, highest priority first: --config, $CONTENT_SOURCE_CONFIG, project, user."""
    paths: list[Path] = []
    if cli_path:
        paths.append(Path(cli_path))
    if env_path := os.environ.get(CONFIG_PATH_ENV):
        paths.append(Path(env_path))
    paths.append(Path(PROJECT_CONFIG_NAME))
    paths.append(Path.home() / ".content-source" / "config.yaml")
    return paths


def load_config(cli_path: str | None = None) -> ContentSourcesConfig:
    """Load the first non-empty config file found, or defaults.

    An explicit ``cli_path`` that does not exist is an error rather than a
    silent fallback. Invalid YAML or values raise ValueError naming the file.
    """
    if cli_path and not Path(cli_path).is_file():
        raise ValueError(f"Config file not found: {cli_path}")

    for path in config_search_paths(cli_path):
        if not path.is_file():
            continue
        raw = _read_yaml(path)
        if raw is None:
            continue
        try:
            config = ContentSourcesConfig.model_validate(_expand_env_refs(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
        logger.debug("Loaded config from %s (%d sources)", path, len(config.sources))
        return config

    return ContentSourcesConfig()


def _read_yaml(path: Path) -> dict | None:
    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: top level must be a mapping, got {type(raw).__name__}")
    return raw


def _expand_env_refs(obj: object) -> object:
    """Substitute ${VAR} and ${VAR:-fallback} in every string value."""
    if isinstance(obj, str):
        return _ENV_REF_RE.sub(lambda m: os.environ.get(m.group(1), m.group(2) or ""), obj)
    if isinstance(obj, dict):
        return {k: _expand_env_refs(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_refs(v) for v in obj]
    return obj


# Default YAML template for `content-source config init`
DEFAULT_CONFIG_TEMPLATE = """\
# content-source.yaml

# Base URL prefixed to rewritten app paths
home_url: "https://app.example.com"

# Source used when --source is not given
default_source: "forum"

sources:
  - id: "forum"
    # Hosts whose links belong to this source (scheme is ignored)
    base_urls:
      - "https://forum.example.com"
    # Each pattern needs a named group "id"
    rules:
      - pattern: "/forum/(?P<id>\\\\d+)"
        content_type: "section"
      - pattern: "/thread/(?P<id>\\\\d+)"
        content_type: "post"
      - pattern: "/reply/(?P<id>\\\\d+)"
        content_type: "comment"
    entity_types:
      section: "forum"
      post: "topic"
      comment: "reply"
    # capabilities:
    #   post:
    #     edit: "edit_topic"

# Logging
log_level: "info"              # debug | info | warn | error
"""
