"""
Knowledge Base Store
====================
Named topic tables of UI/UX guidance, read once from the YAML files in
``knowledge/data`` and frozen for the life of the process.

Two shapes:
- record: mapping of topic keys to nested values (color, typography, ...)
- list: ordered entries, each a record with an identifying field
  (``principle`` for design principles, ``name`` for layouts)

Tables are stored as MappingProxyType / tuple trees. Callers that need to
hand data out (serialize, wrap) use ``thaw()`` to get plain dict/list copies.
"""
from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

from ..errors import KnowledgeBaseError

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"

RECORD = "record"
LIST = "list"

# topic name -> (shape, identifying field for list tables)
TOPICS: dict[str, tuple[str, str | None]] = {
    "component_guidance": (RECORD, None),
    "section_guidance": (RECORD, None),
    "modern_palettes": (RECORD, None),
    "design_principles": (LIST, "principle"),
    "layout_patterns": (LIST, "name"),
    "color_guidance": (RECORD, None),
    "typography_guidance": (RECORD, None),
    "responsive_guidance": (RECORD, None),
    "accessibility_guidance": (RECORD, None),
    "modern_trends": (RECORD, None),
    "animation_guidance": (RECORD, None),
    "inspiration": (RECORD, None),
}


def freeze(value: Any) -> Any:
    """Recursively convert dicts/lists into read-only mappings/tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """Plain dict/list deep copy of a frozen value."""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(v) for v in value]
    return value


class KnowledgeBase:
    """Immutable collection of topic tables."""

    def __init__(self, tables: Mapping[str, Any]):
        self._tables = MappingProxyType({k: freeze(v) for k, v in tables.items()})

    @classmethod
    def load(cls, data_dir: Path | str | None = None) -> "KnowledgeBase":
        """Read and shape-check every topic file in ``data_dir``."""
        data_dir = Path(data_dir) if data_dir else DATA_DIR
        tables: dict[str, Any] = {}
        for topic, (shape, ident) in TOPICS.items():
            path = data_dir / f"{topic}.yaml"
            if not path.exists():
                raise KnowledgeBaseError(f"Topic file not found: {path}")
            try:
                raw = yaml.safe_load(path.read_text(encoding="utf-8"))
            except yaml.YAMLError as e:
                raise KnowledgeBaseError(f"Invalid YAML in {path.name}: {e}") from e
            _check_shape(topic, raw, shape, ident)
            tables[topic] = raw
            logger.debug("Loaded topic %s from %s", topic, path.name)
        logger.info("Knowledge base loaded: %d topics from %s", len(tables), data_dir)
        return cls(tables)

    def table(self, topic: str) -> Any:
        """Frozen table for ``topic``. KeyError if unknown."""
        return self._tables[topic]

    def names(self) -> list[str]:
        return list(self._tables)

    def __len__(self) -> int:
        return len(self._tables)


def _check_shape(topic: str, raw: Any, shape: str, ident: str | None) -> None:
    if shape == RECORD:
        if not isinstance(raw, dict):
            raise KnowledgeBaseError(f"{topic}: expected a mapping, got {type(raw).__name__}")
        return
    if not isinstance(raw, list):
        raise KnowledgeBaseError(f"{topic}: expected a list, got {type(raw).__name__}")
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict) or not isinstance(entry.get(ident), str):
            raise KnowledgeBaseError(f"{topic}[{i}]: missing '{ident}' field")


# ---------- Singleton ----------

_kb: KnowledgeBase | None = None


def get_knowledge_base(data_dir: Path | str | None = None) -> KnowledgeBase:
    global _kb
    if _kb is None:
        _kb = KnowledgeBase.load(data_dir)
    return _kb
