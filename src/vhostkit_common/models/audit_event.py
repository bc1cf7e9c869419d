"""Audit records for provisioning runs."""

from __future__ import annotations

import json
from datetime import datetime, timezone

from pydantic import BaseModel, Field


class StepRecord(BaseModel):
    """Outcome of one numbered provisioning step."""

    name: str
    result: str = "success"
    duration_ms: int = 0
    error: str | None = None


class AuditEvent(BaseModel):
    """One ``site create`` run: inputs, the steps it got through, and how it ended."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    host_id: str = "localhost"
    actor: str = ""
    action: str = ""
    domain: str = ""
    php_version: str | None = None
    socket_path: str | None = None
    layout: str | None = None
    steps: list[StepRecord] = Field(default_factory=list)
    result: str = "pending"
    error: str | None = None
    duration_ms: int | None = None

    @property
    def failed_step(self) -> str | None:
        for record in self.steps:
            if record.result == "failure":
                return record.name
        return None

    @property
    def completed_steps(self) -> list[str]:
        return [r.name for r in self.steps if r.result == "success"]

    def to_jsonl(self) -> str:
        data = self.model_dump(mode="json")
        data["failed_step"] = self.failed_step
        return json.dumps(data)
