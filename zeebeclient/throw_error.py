"""Command that throws a business error from a job."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from zeebeclient.command import VariablesCommand


@dataclass
class ThrowErrorRequest:
    job_key: int = 0
    error_code: str = ""
    error_message: str = ""
    variables: str = ""


class ThrowErrorCommand(VariablesCommand):
    """Report a business error for a job, identified by an error code."""

    _request_type = ThrowErrorRequest

    def job_key(self, key: int) -> ThrowErrorCommand:
        return self._set(job_key=key)

    def error_code(self, code: str) -> ThrowErrorCommand:
        return self._set(error_code=code)

    def error_message(self, message: str) -> ThrowErrorCommand:
        return self._set(error_message=message)

    def send(self, timeout: float | None = None) -> Any:
        return self._dispatch(self._gateway.throw_error, timeout)