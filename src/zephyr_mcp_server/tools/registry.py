"""Tool registry

Typed tool descriptors and a name-indexed registry that rejects duplicates
at registration time. Both the MCP server and the CLI harness dispatch
through a registry built from the same descriptors.
"""
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, List

from mcp.types import CallToolResult

from ..utils.errors import UnknownToolError

logger = logging.getLogger(__name__)

Handler = Callable[..., Awaitable[CallToolResult]]


@dataclass(frozen=True)
class ToolSpec:
    """A named tool exposed to the calling agent.

    Attributes:
        name: Unique wire name of the tool
        description: Short description shown in the tool list
        handler: Coroutine taking the MCP context plus keyword arguments; its
            annotated signature doubles as the tool's parameter specification
        read_only: Whether the tool only reads remote state
    """

    name: str
    description: str
    handler: Handler
    read_only: bool = True

    @property
    def parameters(self) -> List[str]:
        """Names of the arguments the tool accepts (context excluded)."""
        return [
            name for name in inspect.signature(self.handler).parameters
            if name != "ctx"
        ]

    @property
    def required_parameters(self) -> List[str]:
        """Names of the arguments without a default."""
        return [
            name for name, param in inspect.signature(self.handler).parameters.items()
            if name != "ctx" and param.default is inspect.Parameter.empty
        ]


class ToolRegistry:
    """Name-indexed collection of ToolSpecs."""

    def __init__(self, specs: Iterable[ToolSpec] = ()):
        self._tools: Dict[str, ToolSpec] = {}
        for spec in specs:
            self.register(spec)

    def register(self, spec: ToolSpec) -> None:
        """Add a tool.

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        if spec.name in self._tools:
            raise ValueError(f"Duplicate tool name: {spec.name}")
        self._tools[spec.name] = spec
        logger.debug(f"Registered tool {spec.name}")

    def get(self, name: str) -> ToolSpec:
        """Look up a tool by name.

        Raises:
            UnknownToolError: If no tool is registered under that name
        """
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def list_tools(self) -> List[ToolSpec]:
        """All registered tools, in registration order."""
        return list(self._tools.values())

    def names(self) -> List[str]:
        return list(self._tools)

    async def call(self, name: str, ctx: Any, arguments: Dict[str, Any]) -> CallToolResult:
        """Dispatch a call to the named tool's handler."""
        spec = self.get(name)
        return await spec.handler(ctx, **arguments)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools
