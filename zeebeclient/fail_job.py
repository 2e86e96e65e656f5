"""Command that marks a job as failed."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from zeebeclient.command import VariablesCommand


@dataclass
class FailJobRequest:
    job_key: int = 0
    retries: int = 0
    error_message: str = ""
    retry_back_off: int = 0
    variables: str = ""


class FailJobCommand(VariablesCommand):
    """Fail a job, giving the number of retries left."""

    _request_type = FailJobRequest

    def job_key(self, key: int) -> FailJobCommand:
        return self._set(job_key=key)

    def retries(self, retries: int) -> FailJobCommand:
        return self._set(retries=retries)

    def retry_backoff(self, backoff: timedelta | float) -> FailJobCommand:
        """Set the delay before the job is retried: a timedelta or a number of seconds."""
        return self._set(retry_back_off=self._millis(backoff))

    def error_message(self, message: str) -> FailJobCommand:
        return self._set(error_message=message)

    def send(self, timeout: float | None = None) -> Any:
        return self._dispatch(self._gateway.fail_job, timeout)