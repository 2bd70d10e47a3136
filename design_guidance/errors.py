"""Exceptions raised by the design guidance server."""


class DesignGuidanceError(Exception):
    """Base class for server errors."""


class UnknownOperation(DesignGuidanceError):
    """A tool name that is not in the registry was invoked."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class RegistryMismatch(DesignGuidanceError):
    """The tool registry and the dispatch table do not list the same names."""

    def __init__(self, unrouted: set, unlisted: set):
        self.unrouted = set(unrouted)
        self.unlisted = set(unlisted)
        parts = []
        if self.unrouted:
            parts.append(f"no handler for: {', '.join(sorted(self.unrouted))}")
        if self.unlisted:
            parts.append(f"not in registry: {', '.join(sorted(self.unlisted))}")
        super().__init__("Registry/dispatch mismatch - " + "; ".join(parts))


class KnowledgeBaseError(DesignGuidanceError):
    """A topic table is missing or does not have its expected shape."""
