"""What a controller operation decided, before it becomes an HTTP response."""
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Render:
    template: str
    context: dict[str, Any] = field(default_factory=dict)
    status_code: int = 200


@dataclass
class Redirect:
    url: str
    status_code: int = 303


@dataclass
class NotFound:
    detail: str = "Not found"
    status_code: int = 404


Outcome = Render | Redirect | NotFound
