"""Zephyr Scale MCP Server

Model Context Protocol server exposing Zephyr Scale Cloud test management tools.
"""

__version__ = "1.0.0"
