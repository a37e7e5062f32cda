"""Request options and their application to a request's headers."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from .common import basic_auth_header
from .emitter import RequestEvent
from .scheduler import Scheduler

logger = logging.getLogger(__name__)

EXPECT_CONTINUE = "100-continue"


class RequestOptions(BaseModel):
    """Options bundle accepted when a request is intercepted.

    Fields other than the ones declared here (agent, timeout, ...) are
    accepted and ignored.
    """

    model_config = ConfigDict(extra="allow")

    headers: Dict[str, Any] = {}
    auth: Optional[str] = None
    path: Optional[str] = None
    method: str = "GET"
    host: Optional[str] = None

    @field_validator("headers", mode="before")
    @classmethod
    def _headers_default(cls, value):
        return {} if value is None else value

    @classmethod
    def coerce(cls, value: Union[None, Mapping[str, Any], "RequestOptions"]) -> "RequestOptions":
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value.model_copy(deep=True)
        return cls.model_validate(dict(value))

    @property
    def has_path(self) -> bool:
        return "path" in self.model_fields_set


def apply_options(request: Any, options: RequestOptions, scheduler: Scheduler) -> None:
    """Copy option headers onto ``request`` and schedule ``continue`` if expected."""

    for name, value in options.headers.items():
        request.set_header(name, value)

    if options.auth and not request.get_header("authorization"):
        request.set_header("Authorization", basic_auth_header(options.auth))

    if request.get_header("expect") == EXPECT_CONTINUE:
        logger.debug(f"Scheduling continue for {request!r}")
        scheduler.set_immediate(request.emit, RequestEvent.CONTINUE)
