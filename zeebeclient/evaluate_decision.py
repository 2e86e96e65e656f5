"""Command that evaluates a decision."""

from __future__ import annotations

from dataclasses import dataclass

from zeebeclient.command import VariablesCommand


@dataclass
class EvaluateDecisionRequest:
    decision_key: int = 0
    decision_id: str = ""
    variables: str = ""
    tenant_id: str = ""


class EvaluateDecisionCommand(VariablesCommand):
    """Evaluate a decision, identified by its key or by its id."""

    _request_type = EvaluateDecisionRequest

    def decision_id(self, decision_id: str) -> EvaluateDecisionCommand:
        return self._set(decision_id=decision_id)

    def decision_key(self, key: int) -> EvaluateDecisionCommand:
        return self._set(decision_key=key)

    def tenant_id(self, tenant_id: str) -> EvaluateDecisionCommand:
        return self._set(tenant_id=tenant_id)

    def send(self, timeout: float | None = None) -> object:
        """Evaluate the decision and return the gateway's response."""
        return self._dispatch(self._gateway.evaluate_decision, timeout)