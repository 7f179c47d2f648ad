from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from .models import RequirementConfig
from .patterns import codeowners_path_to_glob

logger = logging.getLogger(__name__)

_COMMENT_RE = re.compile(r"(?<!\\)#.*$")


@dataclass(frozen=True)
class ParsedCodeownersRule:
    path: str
    teams: list[str]
    line: int


def parse_codeowners_rules(text: str) -> list[ParsedCodeownersRule]:
    """Parse every rule line of a CODEOWNERS file, in file order."""
    out: list[ParsedCodeownersRule] = []
    for idx, raw in enumerate(text.splitlines(), start=1):
        line = _COMMENT_RE.sub("", raw).strip()
        if not line or line.startswith("#"):
            continue

        path, *teams = line.split()
        logger.debug("parsed line %d from codeowners: path: %s, teams: %s", idx, path, teams)
        out.append(ParsedCodeownersRule(path=path, teams=teams, line=idx))
    return out


def parse_codeowners(text: str, enforce_on: Iterable[str]) -> list[RequirementConfig]:
    """Turn CODEOWNERS text into requirement configs.

    Only rules whose path token appears verbatim in `enforce_on` are kept;
    file order is preserved because the last matching rule wins.
    """
    enforced = set(enforce_on)
    return [
        RequirementConfig(paths=[codeowners_path_to_glob(rule.path)], teams=list(rule.teams))
        for rule in parse_codeowners_rules(text)
        if rule.path in enforced
    ]
