"""Tool response envelope helpers.

Every tool returns the MCP tool-call convention:

    {"content": [{"type": "text", "text": "..."}]}

Structured results are rendered as pretty-printed JSON of the result
model, failures as "Error: <message>" (or the bare message for tools
that report errors without the prefix).
"""

from __future__ import annotations

import functools
import json
import logging
from collections.abc import Callable
from typing import Any, ParamSpec

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from git_mcp_tools.exceptions import GitToolError, describe_error

logger = logging.getLogger(__name__)

ToolResponse = dict[str, list[dict[str, str]]]

P = ParamSpec("P")


class CamelModel(BaseModel):
    """Base model whose wire names are the camelCase form of its fields."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Dump by alias, leaving out optional fields that were not set."""
        return self.model_dump(by_alias=True, exclude_none=True)


def text_response(text: str) -> ToolResponse:
    """Wrap plain text in the tool result envelope."""
    return {"content": [{"type": "text", "text": text}]}


def json_response(result: CamelModel) -> ToolResponse:
    """Render a result model as indented JSON text."""
    return text_response(json.dumps(result.to_payload(), indent=2))


def error_response(error: BaseException | str, prefix: bool = True) -> ToolResponse:
    """Render a failure.

    Args:
        error: Exception or message to report
        prefix: Prepend "Error: " to the message
    """
    message = error if isinstance(error, str) else describe_error(error)
    return text_response(f"Error: {message}" if prefix else message)


def invalid_parameters_response(error: PydanticValidationError) -> ToolResponse:
    """Render a schema validation failure as 'Invalid parameters: ...'."""
    details = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        details.append(f"{location}: {item['msg']}" if location else item["msg"])
    return text_response(f"Invalid parameters: {', '.join(details)}")


def tool_handler(
    prefix_errors: bool = True,
) -> Callable[[Callable[P, ToolResponse]], Callable[P, ToolResponse]]:
    """Turn a handler's exceptions into error responses.

    Schema failures become 'Invalid parameters: ...', GitToolError becomes
    an error response, and anything unexpected is logged with its traceback
    before being reported the same way.

    Args:
        prefix_errors: Whether error messages get the "Error: " prefix
    """

    def decorator(handler: Callable[P, ToolResponse]) -> Callable[P, ToolResponse]:
        @functools.wraps(handler)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> ToolResponse:
            try:
                return handler(*args, **kwargs)
            except PydanticValidationError as e:
                logger.debug("Invalid parameters for %s: %s", handler.__name__, e)
                return invalid_parameters_response(e)
            except GitToolError as e:
                logger.warning("%s failed: %s", handler.__name__, e.message)
                return error_response(e, prefix=prefix_errors)
            except Exception as e:
                logger.exception("Unexpected error in %s", handler.__name__)
                return error_response(e, prefix=prefix_errors)

        return wrapper

    return decorator
