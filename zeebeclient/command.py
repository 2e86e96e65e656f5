"""Command plumbing shared by all commands, plus set-variables and topology."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, TypeVar

R = TypeVar("R")
C = TypeVar("C", bound="Command")

RetryPredicate = Callable[[BaseException], bool]


class InvalidVariablesError(ValueError):
    """Raised when variables are not valid JSON or cannot be serialised."""


def validate_json(name: str, value: str) -> None:
    """Raise InvalidVariablesError unless ``value`` is a valid JSON document."""
    try:
        json.loads(value)
    except (TypeError, ValueError) as exc:
        raise InvalidVariablesError(f"{name} must be valid JSON: {exc}") from exc


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and value == 0:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict)) and len(value) == 0:
        return True
    return False


def _to_plain(value: Any, ignore_omitempty: bool) -> Any:
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        out: dict[str, Any] = {}
        for f in dataclasses.fields(value):
            key = f.metadata.get("json", f.name)
            if key == "-":
                continue
            item = getattr(value, f.name)
            if not ignore_omitempty and f.metadata.get("omitempty") and _is_empty(item):
                continue
            out[key] = _to_plain(item, ignore_omitempty)
        return out
    if isinstance(value, Mapping):
        for key in value:
            if not isinstance(key, (str, int)) or isinstance(key, bool):
                raise TypeError(f"unsupported key type {type(key).__name__}")
        return {
            str(key): _to_plain(item, ignore_omitempty)
            for key, item in sorted(value.items(), key=lambda kv: str(kv[0]))
        }
    if isinstance(value, (list, tuple)):
        return [_to_plain(item, ignore_omitempty) for item in value]
    raise TypeError(f"cannot serialise {type(value).__name__}")


def to_json(name: str, value: Any, ignore_omitempty: bool) -> str:
    """Serialise ``value`` to compact JSON.

    Dataclass fields whose metadata holds ``omitempty`` are dropped when empty,
    unless ``ignore_omitempty`` is true; ``json`` metadata renames a field.
    """
    try:
        plain = _to_plain(value, ignore_omitempty)
        return json.dumps(plain, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise InvalidVariablesError(f"{name} cannot be serialised to JSON: {exc}") from exc


def long_polling_millis(timeout: float | None) -> int:
    """Convert a timeout in seconds to milliseconds; ``None`` means no limit (0)."""
    if timeout is None:
        return 0
    if timeout < 0:
        raise ValueError("timeout must not be negative")
    return int(timeout * 1000)


class Command:
    """Base of all commands: holds the gateway, the retry predicate and the request.

    Subclasses name their request type in ``_request_type``; a fresh request is
    built for every command. Without a retry predicate no error is retried.
    """

    _request_type: Callable[[], Any] | None = None

    def __init__(self, gateway: Any, should_retry: RetryPredicate | None = None) -> None:
        self._gateway = gateway
        self._should_retry = should_retry
        if self._request_type is not None:
            self._request = self._request_type()

    def _invoke(self, call: Callable[[], R]) -> R:
        while True:
            try:
                return call()
            except Exception as exc:
                if self._should_retry is None or not self._should_retry(exc):
                    raise

    def _dispatch(self, rpc: Callable[..., R], timeout: float | None) -> R:
        return self._invoke(lambda: rpc(self._request, timeout=timeout))

    def _set(self: C, **fields: Any) -> C:
        for name, value in fields.items():
            setattr(self._request, name, value)
        return self

    @staticmethod
    def _millis(duration: timedelta | float) -> int:
        """Milliseconds in a timedelta or in a number of seconds."""
        if isinstance(duration, timedelta):
            return duration // timedelta(milliseconds=1)
        return int(duration * 1000)


class VariablesCommand(Command):
    """Command whose request carries a ``variables`` JSON string."""

    _request: Any

    def variables_from_string(self, variables: str):
        validate_json("variables", variables)
        return self._set(variables=variables)

    def variables_from_stringer(self, variables: Any):
        return self.variables_from_string(str(variables))

    def variables_from_object(self, variables: Any):
        return self._set(variables=to_json("variables", variables, False))

    def variables_from_object_ignore_omitempty(self, variables: Any):
        return self._set(variables=to_json("variables", variables, True))

    def variables_from_map(self, variables: Mapping[str, Any]):
        return self.variables_from_object(variables)


@dataclass
class SetVariablesRequest:
    element_instance_key: int = 0
    variables: str = ""
    local: bool = False


class SetVariablesCommand(VariablesCommand):
    """Set variables in the scope of an element instance."""

    _request_type = SetVariablesRequest

    def element_instance_key(self, key: int) -> SetVariablesCommand:
        return self._set(element_instance_key=key)

    def local(self, local: bool) -> SetVariablesCommand:
        return self._set(local=local)

    def send(self, timeout: float | None = None) -> Any:
        return self._dispatch(self._gateway.set_variables, timeout)


class TopologyCommand(Command):
    """Ask the gateway for the cluster topology."""

    def send(self, timeout: float | None = None) -> Any:
        return self._invoke(lambda: self._gateway.topology(timeout=timeout))