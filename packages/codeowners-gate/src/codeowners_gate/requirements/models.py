from __future__ import annotations

from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from ..errors import ConfigurationError

UNMATCHED = "unmatched"

TeamConfig = str | dict[str, Any]


class RequirementConfig(BaseModel):
    """One ownership rule: the paths it covers and who must approve them.

    `paths` is either a list of globs (a leading "!" negates one) or the
    string "unmatched", which covers any path no later rule has claimed.
    `teams` is required; an explicit empty list unrequires the paths.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    paths: Literal["unmatched"] | list[str]
    teams: list[TeamConfig]

    @property
    def is_unmatched(self) -> bool:
        return self.paths == UNMATCHED


_REQUIREMENTS_ADAPTER = TypeAdapter(list[RequirementConfig])


def parse_yaml_requirements(text: str) -> list[RequirementConfig]:
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Yaml requirements: {exc}") from exc

    if not isinstance(raw, list):
        raise ConfigurationError(
            "Requirements file does not contain an array.", value=raw
        )

    try:
        return _REQUIREMENTS_ADAPTER.validate_python(raw)
    except ValidationError as exc:
        raise ConfigurationError(
            "Yaml requirements: invalid format", value=exc.errors()
        ) from exc
