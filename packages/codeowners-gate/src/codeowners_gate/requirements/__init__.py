from .codeowners import parse_codeowners
from .models import UNMATCHED, RequirementConfig, parse_yaml_requirements
from .patterns import codeowners_path_to_glob, compile_glob
from .teams import AllOf, AnyOf, TeamRef, parse_team_expr

__all__ = [
    "UNMATCHED",
    "AllOf",
    "AnyOf",
    "RequirementConfig",
    "TeamRef",
    "codeowners_path_to_glob",
    "compile_glob",
    "parse_codeowners",
    "parse_team_expr",
    "parse_yaml_requirements",
]
