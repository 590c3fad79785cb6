"""Tool Result Envelopes

Every tool returns the same shape: a single text content block holding
either pretty-printed JSON (success) or an error description (isError=True).
"""
import inspect
import json
import logging
from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar

from mcp.types import CallToolResult, TextContent

from .errors import ZephyrError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


def success_result(payload: Any) -> CallToolResult:
    """Wrap a JSON-serializable payload in a success envelope."""
    text = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=False)


def format_error(error: Exception, operation: str) -> str:
    """Render an error with its full detail block.

    Example:
        Error fetching test case PROJ-T1: Request failed with status code 404
        Error Detail:
        {"status": 404, ...}
    """
    message = error.message if isinstance(error, ZephyrError) else str(error)
    detail = error.to_dict() if isinstance(error, ZephyrError) else {"type": type(error).__name__}
    return (
        f"Error {operation}: {message}\n"
        f"Error Detail:\n{json.dumps(detail, indent=2, ensure_ascii=False, default=str)}"
    )


def error_result(error: Exception, operation: str) -> CallToolResult:
    """Wrap a failure in an error envelope."""
    return CallToolResult(
        content=[TextContent(type="text", text=format_error(error, operation))],
        isError=True
    )


def enveloped(operation: str) -> Callable[[F], F]:
    """Decorator turning a tool handler's payload or exception into an envelope.

    The decorated coroutine returns a JSON-serializable payload (or an
    already-built CallToolResult) and may raise freely; the wrapper never lets
    an exception escape.

    Args:
        operation: Phrase describing the operation, formatted with the
            handler's bound arguments (e.g. "fetching test case {test_case_key}")
    """

    def decorator(func: F) -> F:
        signature = inspect.signature(func)

        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> CallToolResult:
            try:
                result = await func(*args, **kwargs)
            except Exception as e:
                description = operation.format_map(_bound_arguments(signature, args, kwargs))
                if isinstance(e, ZephyrError):
                    logger.error(f"Tool {func.__name__} failed while {description}: {e.message}")
                else:
                    logger.exception(f"Unexpected error in {func.__name__} while {description}:")
                return error_result(e, description)

            if isinstance(result, CallToolResult):
                return result
            return success_result(result)

        return wrapper  # type: ignore

    return decorator


class _Arguments(dict):
    def __missing__(self, key: str) -> str:
        return "?"


def _bound_arguments(signature: inspect.Signature, args: tuple, kwargs: dict) -> _Arguments:
    try:
        bound = signature.bind_partial(*args, **kwargs)
    except TypeError:
        # Unexpected arguments; describe with what was passed by name
        return _Arguments(kwargs)
    bound.apply_defaults()
    return _Arguments(bound.arguments)
