"""
Shapes shared by requests and responses.
"""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field


class Status(str, Enum):
    OK = "ok"
    ERROR = "error"


class Proxy(BaseModel):
    url: str  # e.g. http://127.0.0.1:8888
    username: Optional[str] = None
    password: Optional[str] = None


class Cookie(BaseModel):
    name: str
    value: str
    domain: Optional[str] = None
    path: Optional[str] = None
    expiry: Optional[int] = None
    http_only: Optional[bool] = Field(default=None, alias="httpOnly")
    secure: Optional[bool] = None
    same_site: Optional[Literal["None", "Lax", "Strict"]] = Field(default=None, alias="sameSite")

    model_config = {"populate_by_name": True, "extra": "allow"}
