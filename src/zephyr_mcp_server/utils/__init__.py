"""Zephyr MCP Server Utilities

This package contains utility modules for the Zephyr MCP server.
"""

__all__ = [
    "errors",
    "merge",
    "pagination",
    "responses",
    "validation",
]
