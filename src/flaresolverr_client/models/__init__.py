from flaresolverr_client.models.common import Cookie, Proxy, Status
from flaresolverr_client.models.commands import (
    Command,
    CreateSessionRequest,
    DestroySessionRequest,
    GetRequest,
    ListSessionsRequest,
    PostField,
    PostRequest,
    REQUEST_MODELS,
    RESPONSE_MODELS,
    V1Request,
)
from flaresolverr_client.models.responses import (
    CreateSessionResponse,
    DestroySessionResponse,
    ErrorResponse,
    HealthResponse,
    IndexResponse,
    ListSessionsResponse,
    RequestResponse,
    Solution,
    V1Response,
    format_timestamp,
)

__all__ = [
    "Command",
    "Cookie",
    "CreateSessionRequest",
    "CreateSessionResponse",
    "DestroySessionRequest",
    "DestroySessionResponse",
    "ErrorResponse",
    "GetRequest",
    "HealthResponse",
    "IndexResponse",
    "ListSessionsRequest",
    "ListSessionsResponse",
    "PostField",
    "PostRequest",
    "Proxy",
    "REQUEST_MODELS",
    "RESPONSE_MODELS",
    "RequestResponse",
    "Solution",
    "Status",
    "V1Request",
    "V1Response",
    "format_timestamp",
]
