"""Handler outcomes, converted to the uniform text envelope by the dispatcher."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(slots=True, frozen=True)
class Success:
    payload: Any


@dataclass(slots=True, frozen=True)
class Failure:
    message: str


Outcome = Union[Success, Failure]
