"""Command that publishes a message for correlation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from zeebeclient.command import VariablesCommand


@dataclass
class PublishMessageRequest:
    name: str = ""
    correlation_key: str = ""
    time_to_live: int = 0
    message_id: str = ""
    variables: str = ""
    tenant_id: str = ""


class PublishMessageCommand(VariablesCommand):
    """Publish a message, named and keyed for correlation."""

    _request_type = PublishMessageRequest

    def message_name(self, name: str) -> PublishMessageCommand:
        return self._set(name=name)

    def correlation_key(self, key: str) -> PublishMessageCommand:
        return self._set(correlation_key=key)

    def message_id(self, message_id: str) -> PublishMessageCommand:
        return self._set(message_id=message_id)

    def tenant_id(self, tenant_id: str) -> PublishMessageCommand:
        return self._set(tenant_id=tenant_id)

    def time_to_live(self, duration: timedelta | float) -> PublishMessageCommand:
        """Set how long the message is buffered: a timedelta or a number of seconds."""
        return self._set(time_to_live=self._millis(duration))

    def send(self, timeout: float | None = None) -> object:
        """Publish the message and return the gateway's response."""
        return self._dispatch(self._gateway.publish_message, timeout)