"""
Serialization hooks for fixtures.

A fixture never guesses how to turn arguments, return values or exceptions
into JSON: callers pass Serializers/Deserializers. The defaults here cover
JSON-safe arguments and values plus plain ``Exception("message")`` errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple, Type

from .errors import UnsupportedErrorTypeError
from .types import JsonValue


def identity(value: Any) -> Any:
    return value


def serialize_call_args(args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> JsonValue:
    """Positional args as a list; wrapped with kwargs only when there are any."""
    if kwargs:
        return {"args": list(args), "kwargs": dict(kwargs)}
    return list(args)


def serialize_error(err: BaseException) -> Dict[str, str]:
    """
    Serialize a plain Exception to ``{"message": ...}``.

    Only exact ``Exception`` instances are accepted. Subclasses carry
    information (their type, extra attributes) that this format would drop,
    so replay would raise something the real function never raises.

    Raises:
        UnsupportedErrorTypeError: For anything but an exact Exception.
    """
    if type(err) is Exception:
        return {"message": str(err)}
    raise UnsupportedErrorTypeError(err)


def deserialize_error(obj: JsonValue) -> Exception:
    """Rebuild the Exception written by serialize_error."""
    if isinstance(obj, dict) and isinstance(obj.get("message"), str):
        return Exception(obj["message"])
    raise ValueError("Cannot deserialize error from invalid object")


class ErrorCodec:
    """
    Error codec for a fixed set of exception classes.

    Stores ``{"type": <class name>, "message": <str>}`` and rebuilds the
    registered class with the message as its only argument. Types are
    matched exactly, like serialize_error.

    Example:
        codec = ErrorCodec(ZeroDivisionError, KeyError)
        fixture = record_and_replay(
            "div",
            div,
            serialize=Serializers(error=codec.serialize),
            deserialize=Deserializers(error=codec.deserialize),
        )
    """

    def __init__(self, *exception_types: Type[BaseException]):
        self._types: Dict[str, Type[BaseException]] = {Exception.__name__: Exception}
        for exc_type in exception_types:
            self._types[exc_type.__name__] = exc_type

    def serialize(self, err: BaseException) -> Dict[str, str]:
        exc_type = self._types.get(type(err).__name__)
        if exc_type is None or exc_type is not type(err):
            raise UnsupportedErrorTypeError(err, supported=", ".join(sorted(self._types)))
        message = str(err.args[0]) if len(err.args) == 1 else str(err)
        return {"type": exc_type.__name__, "message": message}

    def deserialize(self, obj: JsonValue) -> BaseException:
        if not (
            isinstance(obj, dict)
            and isinstance(obj.get("type"), str)
            and isinstance(obj.get("message"), str)
        ):
            raise ValueError("Cannot deserialize error from invalid object")
        exc_type = self._types.get(obj["type"])
        if exc_type is None:
            raise ValueError(f"Cannot deserialize unregistered error type: {obj['type']}")
        return exc_type(obj["message"])


@dataclass(frozen=True)
class Serializers:
    """How arguments, return values and exceptions become JSON."""

    args: Callable[[Tuple[Any, ...], Dict[str, Any]], JsonValue] = serialize_call_args
    success: Callable[[Any], JsonValue] = identity
    error: Callable[[BaseException], JsonValue] = serialize_error


@dataclass(frozen=True)
class Deserializers:
    """How stored JSON becomes a return value or an exception to raise."""

    success: Callable[[JsonValue], Any] = identity
    error: Callable[[JsonValue], BaseException] = deserialize_error
