"""Fluent command builders for a Zeebe workflow engine gateway, and job payload decoding."""

__version__ = "0.1.0"

__all__ = [
    "command",
    "create_instance",
    "evaluate_decision",
    "fail_job",
    "job",
    "publish_message",
    "throw_error",
]