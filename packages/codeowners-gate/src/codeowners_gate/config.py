from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel

from .errors import ConfigurationError

RequirementsFormat = Literal["auto", "codeowners", "yaml"]

_TRUE = {"true", "True", "TRUE"}
_FALSE = {"false", "False", "FALSE"}


class GateSettings(BaseModel):
    """Inputs for one gate run.

    Mirrors the action inputs (`requirements`, `requirements-file`,
    `enforce-on`, `token`, `status`, `fail`) plus the workflow environment.
    `fail` stays as the raw input text; `fail_on_unsatisfied` parses it
    during the run so a bad value is reported as an error status.
    """

    requirements: str | None = None
    requirements_file: str | None = None
    requirements_format: RequirementsFormat = "auto"
    enforce_on: str | None = None

    token: str | None = None
    status: str | None = None
    fail: str | None = None

    ci: bool = False
    workspace: str = "."
    event_path: str | None = None
    run_id: str | None = None
    api_url: str = "https://api.github.com"
    server_url: str = "https://github.com"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "GateSettings":
        env = os.environ if env is None else env
        return cls(
            requirements=_input(env, "requirements"),
            requirements_file=_input(env, "requirements-file"),
            enforce_on=_input(env, "enforce-on"),
            token=_input(env, "token"),
            status=_input(env, "status"),
            fail=_input(env, "fail"),
            ci=env.get("CI", "").strip().lower() not in ("", "0", "false"),
            workspace=env.get("GITHUB_WORKSPACE") or ".",
            event_path=env.get("GITHUB_EVENT_PATH") or None,
            run_id=env.get("GITHUB_RUN_ID") or None,
            api_url=env.get("GITHUB_API_URL") or "https://api.github.com",
            server_url=env.get("GITHUB_SERVER_URL") or "https://github.com",
        )

    def fail_on_unsatisfied(self) -> bool:
        return parse_bool_input("fail", self.fail)

    def with_overrides(self, **values: object) -> "GateSettings":
        return self.model_copy(update={k: v for k, v in values.items() if v is not None})


def _input(env: Mapping[str, str], name: str) -> str | None:
    # The runner keeps hyphens in INPUT_ names; accept underscores as well.
    for key in (f"INPUT_{name.upper()}", f"INPUT_{name.upper().replace('-', '_')}"):
        value = env.get(key)
        if value is not None and value.strip():
            return value.strip()
    return None


def parse_bool_input(name: str, value: str | None) -> bool:
    if value is None:
        return False
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ConfigurationError(
        f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}",
        value=value,
    )
