"""Commands that create process instances, optionally awaiting their result."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from zeebeclient.command import RetryPredicate, VariablesCommand, long_polling_millis

LATEST_VERSION = -1


@dataclass
class ProcessInstanceCreationStartInstruction:
    """Start the new instance before the given element instead of at the start event."""

    element_id: str = ""


@dataclass
class CreateProcessInstanceRequest:
    process_definition_key: int = 0
    bpmn_process_id: str = ""
    version: int = 0
    variables: str = ""
    start_instructions: list[ProcessInstanceCreationStartInstruction] = field(default_factory=list)
    tenant_id: str = ""


@dataclass
class CreateProcessInstanceWithResultRequest:
    request: CreateProcessInstanceRequest = field(default_factory=CreateProcessInstanceRequest)
    request_timeout: int = 0
    fetch_variables: list[str] = field(default_factory=list)


class CreateInstanceCommand(VariablesCommand):
    """Create a process instance by process definition key or BPMN process id."""

    def __init__(self, gateway: Any, should_retry: RetryPredicate | None = None) -> None:
        super().__init__(gateway, should_retry)
        self._request = CreateProcessInstanceRequest()

    def bpmn_process_id(self, process_id: str) -> CreateInstanceCommand:
        self._request.bpmn_process_id = process_id
        return self

    def process_definition_key(self, key: int) -> CreateInstanceCommand:
        self._request.process_definition_key = key
        return self

    def version(self, version: int) -> CreateInstanceCommand:
        self._request.version = version
        return self

    def latest_version(self) -> CreateInstanceCommand:
        self._request.version = LATEST_VERSION
        return self

    def tenant_id(self, tenant_id: str) -> CreateInstanceCommand:
        self._request.tenant_id = tenant_id
        return self

    def start_before_element(self, element_id: str) -> CreateInstanceCommand:
        self._request.start_instructions.append(
            ProcessInstanceCreationStartInstruction(element_id=element_id)
        )
        return self

    def with_result(self) -> CreateInstanceWithResultCommand:
        """Switch to a command that waits for the instance to complete."""
        return CreateInstanceWithResultCommand(self._gateway, self._should_retry, self._request)

    def send(self, timeout: float | None = None) -> Any:
        return self._invoke(
            lambda: self._gateway.create_process_instance(self._request, timeout=timeout)
        )


class CreateInstanceWithResultCommand(VariablesCommand):
    """Create a process instance and wait for its completion."""

    def __init__(
        self,
        gateway: Any,
        should_retry: RetryPredicate | None = None,
        request: CreateProcessInstanceRequest | None = None,
    ) -> None:
        super().__init__(gateway, should_retry)
        self._result_request = CreateProcessInstanceWithResultRequest(
            request=request if request is not None else CreateProcessInstanceRequest()
        )
        # Variable setters act on the wrapped creation request.
        self._request = self._result_request.request

    def fetch_variables(self, *args: str) -> CreateInstanceWithResultCommand:
        self._result_request.fetch_variables = list(args)
        return self

    def send(self, timeout: float | None = None) -> Any:
        self._result_request.request_timeout = long_polling_millis(timeout)
        return self._invoke(
            lambda: self._gateway.create_process_instance_with_result(
                self._result_request, timeout=timeout
            )
        )