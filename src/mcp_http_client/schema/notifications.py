from __future__ import annotations

import typing as t

from pydantic import ConfigDict, Field, StrictFloat, StrictInt, StrictStr

from .base import SchemaModel
from .jsonrpc import JSONRPCNotification, RequestId

PROGRESS_METHOD = "notifications/progress"
CANCELLED_METHOD = "notifications/cancelled"

Number = t.Union[StrictInt, StrictFloat]


class ProgressNotification(SchemaModel):
    """Params of a ``notifications/progress`` message."""

    model_config = ConfigDict(extra="allow")

    progress_token: RequestId = Field(alias="progressToken")
    progress: Number
    total: t.Optional[Number] = None
    message: t.Optional[StrictStr] = None


class CancelledParams(SchemaModel):
    request_id: RequestId = Field(alias="requestId")
    reason: t.Optional[str] = None


def cancelled_notification(request_id: RequestId, reason: t.Optional[str] = None) -> JSONRPCNotification:
    params = CancelledParams(request_id=request_id, reason=reason)
    return JSONRPCNotification(method=CANCELLED_METHOD, params=params.to_dict())
