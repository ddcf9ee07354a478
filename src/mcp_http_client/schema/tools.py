"""Tool descriptors, tool call results and the requests that fetch them.

Server payloads are parsed leniently: unknown fields are kept in ``extra``
and written back by ``to_dict()`` so nothing is lost on the way through.
"""

from __future__ import annotations

import typing as t

from pydantic import ConfigDict, Field, StrictBool, StrictStr, ValidationError, model_validator

from ..errors import SchemaError, ShapeError
from .base import JSON, SchemaModel, describe_validation_error
from .jsonrpc import JSONRPCRequest, RequestId

LIST_TOOLS_METHOD = "tools/list"
CALL_TOOL_METHOD = "tools/call"


class ContentBlock(SchemaModel):
    """One item of a tool result. Only ``text`` blocks are interpreted."""

    model_config = ConfigDict(extra="allow")

    type: StrictStr
    text: t.Optional[StrictStr] = None

    @model_validator(mode="after")
    def _text_blocks_carry_text(self) -> "ContentBlock":
        if self.type == "text" and self.text is None:
            raise ValueError("text content block is missing text")
        return self


class ToolInputSchema(SchemaModel):
    model_config = ConfigDict(extra="allow")

    type: t.Literal["object"]
    properties: t.Optional[JSON] = None
    required: t.Optional[t.List[StrictStr]] = None

    @property
    def parameter_names(self) -> t.List[str]:
        return list((self.properties or {}).keys())


class Tool(SchemaModel):
    model_config = ConfigDict(extra="allow")

    name: str = Field(min_length=1)
    title: t.Optional[str] = None
    description: t.Optional[str] = None
    input_schema: ToolInputSchema = Field(alias="inputSchema")


class ListToolsResult(SchemaModel):
    tools: t.List[Tool]
    next_cursor: t.Optional[str] = Field(default=None, alias="nextCursor")

    @classmethod
    def from_dict(cls, data: t.Any) -> "ListToolsResult":
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            detail = describe_validation_error(exc)
            # a missing or non-array tools field is a shape problem, a bad tool entry is not
            if any(error["loc"] in ((), ("tools",)) for error in exc.errors()):
                raise ShapeError(f"tools/list result has no 'tools' array: {detail}") from exc
            raise SchemaError(detail) from exc


class CallToolResult(SchemaModel):
    model_config = ConfigDict(extra="allow")

    content: t.List[ContentBlock]
    structured_content: t.Optional[JSON] = Field(default=None, alias="structuredContent")
    is_error: t.Optional[StrictBool] = Field(default=None, alias="isError")

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content if block.type == "text" and block.text)


class ListToolsParams(SchemaModel):
    cursor: t.Optional[StrictStr] = None


class CallToolParams(SchemaModel):
    name: str = Field(min_length=1)
    arguments: JSON = Field(default_factory=dict)
    meta: t.Optional[JSON] = Field(default=None, alias="_meta")


def list_tools_request(request_id: RequestId, cursor: t.Optional[str] = None) -> JSONRPCRequest:
    params = ListToolsParams(cursor=cursor).to_dict()
    return JSONRPCRequest(id=request_id, method=LIST_TOOLS_METHOD, params=params or None)


def call_tool_request(
    request_id: RequestId,
    name: str,
    arguments: t.Optional[JSON] = None,
    progress_token: t.Optional[RequestId] = None,
) -> JSONRPCRequest:
    params = CallToolParams(
        name=name,
        arguments=arguments if arguments is not None else {},
        meta={"progressToken": progress_token} if progress_token is not None else None,
    )
    return JSONRPCRequest(id=request_id, method=CALL_TOOL_METHOD, params=params.to_dict())
