"""Access to the shared Zephyr client from a tool invocation context."""

from typing import Any

from .client import ZephyrClient

CLIENT_KEY = "zephyr_client"


def get_zephyr_client(ctx: Any) -> ZephyrClient:
    """Return the client placed in the lifespan context at startup.

    Raises:
        ValueError: If no client is present in the context
    """
    client = ctx.request_context.lifespan_context.get(CLIENT_KEY)
    if client is None:
        raise ValueError("ZephyrClient not found in context")
    return client
