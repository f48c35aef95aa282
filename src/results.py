# ABOUTME: Tagged result types returned across layer boundaries instead of raised exceptions.
# ABOUTME: Ok wraps a value, Err carries a FailureKind the endpoint layer maps to an HTTP status.

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class FailureKind(str, Enum):
    """Why an operation did not produce a value."""

    VALIDATION = "validation"
    TRANSPORT = "transport"
    DESERIALIZATION = "deserialization"
    INTERNAL = "internal"
    CANCELLED = "cancelled"


class Ok(BaseModel, Generic[T]):
    """Successful outcome holding the produced value."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: T


class Err(BaseModel):
    """Failed outcome.

    `message` is meant for logs and is only shown to callers for validation failures.
    `cause` keeps the original exception, if any, so it can be logged with its traceback.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: FailureKind
    message: str
    cause: Any = None
