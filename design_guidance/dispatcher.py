"""
Dispatcher
==========
Maps (tool name, arguments) to a slice of the knowledge base.

Routing is an explicit name -> handler table built from a handful of
strategy factories, one per table shape:

- exact key with fallback     component / section guidance
- substring on record keys    color, typography, responsive, a11y, trends, animation
- substring on a list field   design principles, layout patterns
- named category              holistic design review
- multi-structure predicate   inspiration by mood
- passthrough                 palettes without a category

The handler table must list exactly the registry's names; the constructor
raises RegistryMismatch otherwise.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Mapping, Optional

from . import filters
from .errors import RegistryMismatch, UnknownOperation
from .knowledge import KnowledgeBase, get_knowledge_base, thaw
from .registry import OperationDescriptor, list_operations

logger = logging.getLogger(__name__)

Handler = Callable[[Optional[str]], Any]

HOLISTIC_CATEGORIES = {
    "principles": "design_principles",
    "accessibility": "accessibility_guidance",
    "responsive": "responsive_guidance",
    "typography": "typography_guidance",
    "color": "color_guidance",
}

ACCESSIBILITY_CHECKS = ["Contrast Check", "Focus States", "Semantic HTML"]
MOBILE_CHECKS = ["Touch Targets", "Readable Text", "No Horizontal Scroll"]


def serialize(payload: Any) -> str:
    """Pretty JSON, 2-space indent, keys in table order."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


def filter_value(args: Optional[Mapping[str, Any]], key: str) -> Optional[str]:
    """The caller's filter string, trimmed, or None when absent/blank/not a string."""
    if not isinstance(args, Mapping):
        return None
    value = args.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        logger.warning("Ignoring non-string %r argument: %r", key, value)
        return None
    value = value.strip()
    return value or None


# ─── Strategy factories ───────────────────────────────────────────────────────


def exact_key_handler(table: Mapping[str, Any], key_field: str) -> Handler:
    def handle(value: Optional[str]) -> Any:
        if value:
            entry = filters.exact_key(table, value)
            if entry is not None:
                return {key_field: filters.fold(value), "guidance": entry}
            logger.debug("No %s named %r, returning full table", key_field, value)
        return thaw(table)

    return handle


def record_filter_handler(table: Mapping[str, Any]) -> Handler:
    def handle(value: Optional[str]) -> Any:
        if value is None:
            return thaw(table)
        return {"filtered": value, "guidance": filters.substring_on_keys(table, value)}

    return handle


def list_filter_handler(entries, field: str, list_field: str) -> Handler:
    def handle(value: Optional[str]) -> Any:
        if value is None:
            return thaw(entries)
        return {
            "filtered": value,
            list_field: filters.substring_on_list_field(entries, field, value),
        }

    return handle


def palettes_handler(table: Mapping[str, Any]) -> Handler:
    def handle(value: Optional[str]) -> Any:
        if value is None:
            return thaw(table)
        return {
            "filtered": value,
            "palettes": filters.substring_on_fields(
                table["trendingCombinations"], ("name", "usage"), value
            ),
        }

    return handle


def holistic_handler(kb: KnowledgeBase) -> Handler:
    summary = {
        "principles": [p["principle"] for p in kb.table("design_principles")],
        "layouts": [lp["name"] for lp in kb.table("layout_patterns")],
        "accessibility": list(ACCESSIBILITY_CHECKS),
        "mobile": list(MOBILE_CHECKS),
    }

    def handle(value: Optional[str]) -> Any:
        topic = HOLISTIC_CATEGORIES.get(filters.fold(value)) if value else None
        if topic:
            return thaw(kb.table(topic))
        return thaw(summary)

    return handle


def inspiration_handler(table: Mapping[str, Any]) -> Handler:
    def handle(value: Optional[str]) -> Any:
        if value is None:
            return thaw(table)
        return {
            "filtered": value,
            "portfolios": filters.tag_contains(table["portfolios"], "categories", value),
            "componentLibraries": filters.field_contains(
                table["componentLibraries"], "style", value
            ),
            "realSiteExamples": filters.substring_on_keys(table["realSiteExamples"], value),
        }

    return handle


def build_routes(kb: KnowledgeBase) -> Dict[str, Handler]:
    t = kb.table
    return {
        "get_component_guidance": exact_key_handler(t("component_guidance"), "component"),
        "get_modern_palettes": palettes_handler(t("modern_palettes")),
        "get_design_principles": list_filter_handler(
            t("design_principles"), "principle", "principles"
        ),
        "get_layout_patterns": list_filter_handler(t("layout_patterns"), "name", "patterns"),
        "get_color_guidance": record_filter_handler(t("color_guidance")),
        "get_typography_guidance": record_filter_handler(t("typography_guidance")),
        "get_section_guidance": exact_key_handler(t("section_guidance"), "section"),
        "get_responsive_guidance": record_filter_handler(t("responsive_guidance")),
        "get_accessibility_guidance": record_filter_handler(t("accessibility_guidance")),
        "get_modern_trends": record_filter_handler(t("modern_trends")),
        "get_animation_guidance": record_filter_handler(t("animation_guidance")),
        "get_holistic_design_review": holistic_handler(kb),
        "get_inspiration_by_mood": inspiration_handler(t("inspiration")),
    }


# ─── Dispatcher ───────────────────────────────────────────────────────────────


class Dispatcher:
    """Validates arguments and routes tool calls to their handler."""

    def __init__(
        self,
        kb: Optional[KnowledgeBase] = None,
        operations: Optional[list[OperationDescriptor]] = None,
        routes: Optional[Dict[str, Handler]] = None,
    ):
        self.kb = kb if kb is not None else get_knowledge_base()
        self.operations = {op.name: op for op in (operations or list_operations())}
        self.routes = routes if routes is not None else build_routes(self.kb)

        unrouted = set(self.operations) - set(self.routes)
        unlisted = set(self.routes) - set(self.operations)
        if unrouted or unlisted:
            raise RegistryMismatch(unrouted, unlisted)

    def list_operations(self) -> list[OperationDescriptor]:
        return list(self.operations.values())

    def invoke(self, name: str, args: Optional[Mapping[str, Any]] = None) -> Any:
        """Run one tool. Raises UnknownOperation for names not in the registry."""
        op = self.operations.get(name)
        if op is None:
            raise UnknownOperation(name)
        value = filter_value(args, op.argument.key) if op.argument else None
        logger.debug("invoke %s filter=%r", name, value)
        return self.routes[name](value)

    def call(self, name: str, args: Optional[Mapping[str, Any]] = None) -> str:
        """invoke() + serialize()."""
        return serialize(self.invoke(name, args))
