"""Jobs handed out to workers, and decoding of their JSON payloads."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T")


@dataclass
class ActivatedJob:
    """A job as the gateway hands it to a worker."""

    key: int = 0
    type: str = ""
    process_instance_key: int = 0
    bpmn_process_id: str = ""
    process_definition_version: int = 0
    process_definition_key: int = 0
    element_id: str = ""
    element_instance_key: int = 0
    custom_headers: str = ""
    worker: str = ""
    retries: int = 0
    deadline: int = 0
    variables: str = ""
    tenant_id: str = ""


def _decode_into(text: str, cls: type[T]) -> T:
    data = json.loads(text)
    if dataclasses.is_dataclass(cls):
        if not isinstance(data, dict):
            raise ValueError(f"cannot decode {type(data).__name__} into {cls.__name__}")
        names = [f.name for f in dataclasses.fields(cls) if f.init]
        by_lower = {name.lower(): name for name in names}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key in names:
                kwargs[key] = value
            elif key.lower() in by_lower:
                kwargs.setdefault(by_lower[key.lower()], value)
        return cls(**kwargs)
    if isinstance(data, cls):
        return data
    raise TypeError(f"cannot decode {type(data).__name__} into {cls.__name__}")


def _decode_object(text: str) -> dict[str, Any]:
    data = json.loads(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


@dataclass
class Job:
    """A single work item of a process; attributes of the activated job are readable directly."""

    activated_job: ActivatedJob

    def __getattr__(self, name: str) -> Any:
        if name == "activated_job":
            raise AttributeError(name)
        return getattr(self.activated_job, name)

    def variables_as_dict(self) -> dict[str, Any]:
        """Return the process instance's variables as a dict."""
        return _decode_object(self.activated_job.variables)

    def variables_as(self, cls: type[T]) -> T:
        """Decode the variables into an instance of ``cls``."""
        return _decode_into(self.activated_job.variables, cls)

    def custom_headers_as_dict(self) -> dict[str, str]:
        """Return the custom headers as a dict of strings."""
        headers = _decode_object(self.activated_job.custom_headers)
        for key, value in headers.items():
            if not isinstance(value, str):
                raise ValueError(f"custom header {key!r} is not a string")
        return headers

    def custom_headers_as(self, cls: type[T]) -> T:
        """Decode the custom headers into an instance of ``cls``."""
        return _decode_into(self.activated_job.custom_headers, cls)