"""
Framework-neutral request and response objects handed to controllers.

Routes build a ``ControllerRequest`` from the incoming HTTP request and
a fresh ``ControllerResponse``, run the controller, then turn the
response into a FastAPI ``JSONResponse``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fastapi import status as http_status
from fastapi.responses import JSONResponse


@dataclass
class ControllerRequest:
    """Inbound data a controller may read."""

    query: Dict[str, Any] = field(default_factory=dict)
    body: Dict[str, Any] = field(default_factory=dict)


class ControllerResponse:
    """Write-once response.

    ``status`` may be called any number of times before ``json``;
    ``json`` may be called exactly once.  The status defaults to 200.
    """

    def __init__(self) -> None:
        self.status_code: int = http_status.HTTP_200_OK
        self.body: Optional[Any] = None
        self.written: bool = False

    def status(self, code: int) -> "ControllerResponse":
        if self.written:
            raise RuntimeError("Response already written")
        self.status_code = code
        return self

    def json(self, body: Any) -> None:
        if self.written:
            raise RuntimeError("Response already written")
        self.body = body
        self.written = True

    def to_response(self) -> JSONResponse:
        """Build the FastAPI response carrying the written status and body."""
        if not self.written:
            raise RuntimeError("Response was never written")
        return JSONResponse(status_code=self.status_code, content=self.body)
