"""Command execution data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExecutionResult:
    """Result of a local or remote command execution."""

    exit_code: int
    output: str
