"""Zephyr MCP Server Data Models

This package contains Pydantic models for Zephyr Scale request payloads.
"""

__all__ = [
    "folder",
    "test_case",
    "test_script",
    "test_step",
]
