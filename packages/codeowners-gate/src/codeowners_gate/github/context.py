from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..errors import ConfigurationError

SUPPORTED_MESSAGE = "action only supported for pull_request_review and pull_request triggers"


@dataclass(frozen=True)
class PullRequestContext:
    owner: str
    repo: str
    number: int
    head_sha: str
    run_id: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_payload(cls, payload: dict[str, Any], *, run_id: str | None = None) -> "PullRequestContext":
        repository = payload.get("repository")
        if not repository:
            raise ConfigurationError(f"unexpected missing repository, {SUPPORTED_MESSAGE}")
        pull_request = payload.get("pull_request")
        if not pull_request:
            raise ConfigurationError(f"unexpected missing pull_request, {SUPPORTED_MESSAGE}")

        return cls(
            owner=repository["owner"]["login"],
            repo=repository["name"],
            number=int(pull_request["number"]),
            head_sha=pull_request["head"]["sha"],
            run_id=run_id,
        )


def load_pull_request_context(event_path: str | Path | None, *, run_id: str | None = None) -> PullRequestContext:
    if not event_path:
        raise ConfigurationError(f"GITHUB_EVENT_PATH is not set, {SUPPORTED_MESSAGE}")
    payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    return PullRequestContext.from_payload(payload, run_id=run_id)
