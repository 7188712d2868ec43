import uuid
from dataclasses import dataclass
from typing import Optional
from fastapi import Request

HDR_REQUEST_ID = "X-Request-Id"


@dataclass(frozen=True)
class RequestContext:
    request_id: str
    endpoint: str
    client_ip: Optional[str]
    user_agent: Optional[str]

    def describe(self) -> str:
        return f"[{self.request_id}] {self.endpoint} from {self.client_ip or 'unknown'}"


def resolve_request_id(request: Request) -> str:
    """Caller-supplied X-Request-Id, or a fresh one stored on request.state"""
    request_id = getattr(request.state, "request_id", None)
    if request_id is None:
        request_id = request.headers.get(HDR_REQUEST_ID) or uuid.uuid4().hex
        request.state.request_id = request_id
    return request_id


def get_request_context(request: Request) -> RequestContext:
    return RequestContext(
        request_id=resolve_request_id(request),
        endpoint=f"{request.method} {request.url.path}",
        client_ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
