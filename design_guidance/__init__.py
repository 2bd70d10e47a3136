"""Design guidance MCP server: a read-only UI/UX knowledge base exposed as tools."""

__version__ = "1.0.0"
