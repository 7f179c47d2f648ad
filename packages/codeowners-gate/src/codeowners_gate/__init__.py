"""codeowners-gate: decide whether a pull request has the approvals its ownership rules require."""

from .errors import CollaboratorError, ConfigurationError, GateError, ReportError
from .loader import build_requirements, load_requirements
from .membership import TeamMembershipCache
from .requirements.requirement import MatchedPathSet, Requirement
from .resolution import PathTrace, Verdict, resolve_requirements, satisfies_all_requirements

__all__ = [
    "CollaboratorError",
    "ConfigurationError",
    "GateError",
    "MatchedPathSet",
    "PathTrace",
    "ReportError",
    "Requirement",
    "TeamMembershipCache",
    "Verdict",
    "build_requirements",
    "load_requirements",
    "resolve_requirements",
    "satisfies_all_requirements",
]
