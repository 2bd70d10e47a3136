"""
Design Guidance Server - Configuration
======================================
Loads from ~/.config/design-guidance/server.yaml (or $DESIGN_GUIDANCE_CONFIG)
with env var overrides. Every setting has a default; no file is required.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import find_dotenv, load_dotenv

from . import __version__

# Load .env from the working directory (before any os.environ access)
load_dotenv(find_dotenv(usecwd=True))

# Paths
PACKAGE_ROOT = Path(__file__).parent
KNOWLEDGE_DATA_DIR = PACKAGE_ROOT / "knowledge" / "data"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "design-guidance" / "server.yaml"

PROTOCOL_VERSION = "2024-11-05"


@dataclass
class ServerConfig:
    """MCP handshake identity."""

    name: str = "design-guidance-server"
    version: str = __version__
    protocol_version: str = PROTOCOL_VERSION


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_dir: Optional[str] = None  # rotating file log disabled when unset


@dataclass
class KnowledgeConfig:
    """Where the topic tables are read from at startup."""

    data_dir: str = str(KNOWLEDGE_DATA_DIR)


@dataclass
class GuidanceConfig:
    """Root configuration object."""

    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    knowledge: KnowledgeConfig = field(default_factory=KnowledgeConfig)


def _apply_section(obj, raw: dict):
    """Apply dict values to a dataclass."""
    for k, v in raw.items():
        if hasattr(obj, k):
            setattr(obj, k, v)


def config_path() -> Path:
    if p := os.environ.get("DESIGN_GUIDANCE_CONFIG"):
        return Path(p).expanduser()
    return DEFAULT_CONFIG_PATH


def load_config(path: Optional[Path] = None) -> GuidanceConfig:
    """Load config from YAML + env vars."""
    cfg = GuidanceConfig()

    path = path or config_path()
    if path.exists():
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        for section in ("server", "logging", "knowledge"):
            if isinstance(raw.get(section), dict):
                _apply_section(getattr(cfg, section), raw[section])

    # Env overrides
    if lvl := os.environ.get("DESIGN_GUIDANCE_LOG_LEVEL"):
        cfg.logging.level = lvl
    if d := os.environ.get("DESIGN_GUIDANCE_LOG_DIR"):
        cfg.logging.log_dir = d
    if k := os.environ.get("DESIGN_GUIDANCE_KNOWLEDGE_DIR"):
        cfg.knowledge.data_dir = k

    return cfg


_config: Optional[GuidanceConfig] = None


def get_config() -> GuidanceConfig:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() reloads."""
    global _config
    _config = None
