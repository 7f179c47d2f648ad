from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import yaml

from .config import GateSettings, RequirementsFormat
from .errors import ConfigurationError, ReportError
from .requirements.codeowners import parse_codeowners
from .requirements.models import RequirementConfig, parse_yaml_requirements
from .requirements.requirement import Requirement

logger = logging.getLogger(__name__)

# https://docs.github.com/en/repositories/managing-your-repositorys-settings-and-features/customizing-your-repository/about-code-owners#codeowners-file-location
VALID_CODEOWNERS_PATHS = ("CODEOWNERS", ".github/CODEOWNERS", "docs/CODEOWNERS")


def is_codeowners_file(filename: str, requirements_format: RequirementsFormat = "auto") -> bool:
    if requirements_format != "auto":
        return requirements_format == "codeowners"
    name = filename.strip()
    return name in VALID_CODEOWNERS_PATHS or Path(name).name == "CODEOWNERS"


def parse_enforce_on(text: str | None) -> list[str]:
    """Parse the YAML list of CODEOWNERS path tokens to enforce."""
    if not text or not text.strip():
        return []
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"enforce-on is not valid yaml: {exc}") from exc
    if not isinstance(loaded, list):
        raise ConfigurationError("enforce-on should be an array", value=loaded)
    enforce_on = [str(p) for p in loaded]
    logger.debug("using enforce-on list: %s", enforce_on)
    return enforce_on


def build_requirements(
    text: str, *, is_codeowners: bool, enforce_on: Iterable[str] = ()
) -> list[Requirement]:
    configs: list[RequirementConfig]
    if is_codeowners:
        logger.info("Parsing CODEOWNERS")
        configs = parse_codeowners(text, enforce_on)
    else:
        logger.info("Parsing yaml requirements")
        configs = parse_yaml_requirements(text)

    return [
        Requirement(c if c.name else c.model_copy(update={"name": f"#{i}"}))
        for i, c in enumerate(configs)
    ]


def load_requirements(settings: GateSettings) -> list[Requirement]:
    """Load requirements from inline text or a requirements file.

    Failures are raised as ReportError so they surface as a failed status
    with a readable description.
    """
    enforce_on = parse_enforce_on(settings.enforce_on)
    text = settings.requirements
    is_codeowners = settings.requirements_format == "codeowners"

    if not text:
        filename = (settings.requirements_file or "").strip()
        if not filename:
            raise ReportError(
                "Requirements are not found",
                ConfigurationError("Either `requirements` or `requirements-file` input is required"),
            )
        is_codeowners = is_codeowners_file(filename, settings.requirements_format)
        path = Path(settings.workspace) / filename
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ReportError(f"Requirements file {filename} could not be read", exc) from exc
    elif settings.requirements_file:
        logger.warning("Ignoring input `requirements-file` because `requirements` was given")

    try:
        return build_requirements(text, is_codeowners=is_codeowners, enforce_on=enforce_on)
    except ConfigurationError as exc:
        raise ReportError("Requirements are not valid", exc) from exc
