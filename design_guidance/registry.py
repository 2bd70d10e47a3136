"""
Operation Registry
==================
Static catalog of the tools this server exposes. Each descriptor carries the
tool name, a description and at most one optional string argument.

Enumerated value sets are advertised to clients through ``inputSchema.enum``
but are informational only: the dispatcher never rejects a value outside the
set, it falls back per tool instead.
"""
from __future__ import annotations

from typing import Any, Iterable, Literal, Optional

from pydantic import BaseModel, Field, model_validator

FREE_TEXT = "free-text"
ENUMERATED = "enumerated"


class ArgumentSpec(BaseModel):
    key: str = Field(min_length=1)
    kind: Literal["free-text", "enumerated"] = FREE_TEXT
    description: str = ""
    allowed_values: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def enum_has_values(self):
        if self.kind == ENUMERATED and not self.allowed_values:
            raise ValueError(f"enumerated argument '{self.key}' needs allowed_values")
        return self


class OperationDescriptor(BaseModel):
    model_config = {"frozen": True}

    name: str = Field(min_length=1)
    description: str
    argument: Optional[ArgumentSpec] = None

    def input_schema(self) -> dict[str, Any]:
        props: dict[str, Any] = {}
        if self.argument:
            prop: dict[str, Any] = {"type": "string", "description": self.argument.description}
            if self.argument.kind == ENUMERATED:
                prop["enum"] = list(self.argument.allowed_values)
            props[self.argument.key] = prop
        return {"type": "object", "properties": props}

    def to_tool(self) -> dict[str, Any]:
        """MCP ``tools/list`` entry."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }


def _category(topic: str) -> ArgumentSpec:
    return ArgumentSpec(
        key="category",
        description=(
            f"Optional filter. Keeps only the {topic} entries whose name contains "
            "this text (case-insensitive). Returns all if empty."
        ),
    )


OPERATIONS: tuple[OperationDescriptor, ...] = (
    OperationDescriptor(
        name="get_component_guidance",
        description="Returns detailed design specs for UI components (buttons, cards, forms, navigation) with modern 2026 best practices.",
        argument=ArgumentSpec(
            key="component",
            kind=ENUMERATED,
            description="Specific component type (optional). Options: buttons, cards, forms, navigation. Returns all if empty.",
            allowed_values=["buttons", "cards", "forms", "navigation"],
        ),
    ),
    OperationDescriptor(
        name="get_modern_palettes",
        description="Returns trending 2026 color palette combinations with specific hex codes and usage examples.",
        argument=ArgumentSpec(
            key="category",
            kind=ENUMERATED,
            description="Palette style (optional). Matched against palette names and usage. Returns all if empty.",
            allowed_values=["tech", "professional", "creative", "minimal", "organic"],
        ),
    ),
    OperationDescriptor(
        name="get_design_principles",
        description="Retrieves core UI/UX principles (hierarchy, whitespace, contrast) to ensure visual quality.",
        argument=_category("principle"),
    ),
    OperationDescriptor(
        name="get_layout_patterns",
        description="Returns standard layout patterns (F-pattern, Z-pattern, Bento Grid) and when to use them.",
        argument=_category("layout pattern"),
    ),
    OperationDescriptor(
        name="get_color_guidance",
        description="Returns color psychology, color scheme types, and modern palette examples.",
        argument=_category("color guidance"),
    ),
    OperationDescriptor(
        name="get_typography_guidance",
        description="Returns font hierarchy scales, font pairings, and readability best practices.",
        argument=_category("typography"),
    ),
    OperationDescriptor(
        name="get_section_guidance",
        description="Returns specific structure and design advice for common page sections (hero, footer, features).",
        argument=ArgumentSpec(
            key="section",
            kind=ENUMERATED,
            description="Specific section to query (optional). Returns all if empty.",
            allowed_values=["header", "hero", "features", "testimonials", "cta", "footer", "pricing", "faq"],
        ),
    ),
    OperationDescriptor(
        name="get_responsive_guidance",
        description="Returns breakpoints, mobile-first principles, and touch target rules.",
        argument=_category("responsive"),
    ),
    OperationDescriptor(
        name="get_accessibility_guidance",
        description="Returns a11y standards regarding contrast, focus states, and semantic HTML.",
        argument=_category("accessibility"),
    ),
    OperationDescriptor(
        name="get_modern_trends",
        description="Returns current visual design trends and what trends to avoid.",
        argument=_category("trend"),
    ),
    OperationDescriptor(
        name="get_animation_guidance",
        description="Returns best practices for UI animation timing, easing, and purpose.",
        argument=_category("animation"),
    ),
    OperationDescriptor(
        name="get_holistic_design_review",
        description="Returns a comprehensive checklist of all design categories to review a user's concept.",
        argument=ArgumentSpec(
            key="category",
            kind=ENUMERATED,
            description="Drill into one category (optional). Returns the summary checklist if empty.",
            allowed_values=["principles", "accessibility", "responsive", "typography", "color"],
        ),
    ),
    OperationDescriptor(
        name="get_inspiration_by_mood",
        description="Returns live inspiration sources (portfolio galleries, component libraries, real sites), optionally filtered by mood or style.",
        argument=ArgumentSpec(
            key="mood",
            description="Mood or style keyword (optional), e.g. minimal, dark, playful. Returns all sources if empty.",
        ),
    ),
)


def list_operations() -> list[OperationDescriptor]:
    """The full catalog, in registration order."""
    return list(OPERATIONS)


def operation_names() -> list[str]:
    return [op.name for op in OPERATIONS]


def tool_schemas(operations: Optional[Iterable[OperationDescriptor]] = None) -> list[dict[str, Any]]:
    """MCP ``tools/list`` entries for ``operations`` (default: the full catalog)."""
    return [op.to_tool() for op in (OPERATIONS if operations is None else operations)]
