import pytest

from codeowners_gate.errors import ConfigurationError
from codeowners_gate.loader import build_requirements
from codeowners_gate.membership import TeamMembershipCache
from codeowners_gate.requirements.models import parse_yaml_requirements

from conftest import FakeTeamLookup

REQUIREMENTS = """
- name: core
  paths:
    - "src/**"
    - "!src/docs/**"
  teams:
    - any-of:
        - all-of:
            - team-a
            - team-b
        - team-c
- paths: unmatched
  teams:
    - "@lead"
"""


def test_parses_names_paths_and_team_expressions() -> None:
    configs = parse_yaml_requirements(REQUIREMENTS)
    assert configs[0].name == "core"
    assert configs[0].paths == ["src/**", "!src/docs/**"]
    assert configs[0].teams == [{"any-of": [{"all-of": ["team-a", "team-b"]}, "team-c"]}]
    assert configs[1].is_unmatched
    assert configs[1].name is None


def test_unnamed_requirements_get_positional_names() -> None:
    assert [r.name for r in build_requirements(REQUIREMENTS, is_codeowners=False)] == ["core", "#1"]


@pytest.mark.parametrize(
    "text",
    [
        "paths: [a]",
        "- paths: 5\n  teams: []",
        "- paths: somewhere\n  teams: []",
        "- teams: [a]",
        "- paths: [a]",
        "- paths: [a]\n  team: ['@lead']",
        "- paths: [a]\n  teams: [a]\n  owners: [b]",
        "- paths: [a]\n  teams: [5]",
        "- [unclosed",
    ],
)
def test_invalid_documents_are_configuration_errors(text: str) -> None:
    with pytest.raises(ConfigurationError):
        parse_yaml_requirements(text)


@pytest.mark.asyncio
async def test_yaml_team_expressions_are_evaluated() -> None:
    lookup = FakeTeamLookup({"team-a": ["a"], "team-b": ["b"], "team-c": ["c"]})
    (core, _) = build_requirements(REQUIREMENTS, is_codeowners=False)
    membership = TeamMembershipCache(lookup)

    assert await core.is_satisfied(["a", "b"], membership)
    assert await core.is_satisfied(["c"], membership)
    assert not await core.is_satisfied(["a"], membership)


def test_misspelled_teams_key_is_rejected_instead_of_unrequiring() -> None:
    with pytest.raises(ConfigurationError, match="Yaml requirements: invalid format"):
        build_requirements('- paths: ["src/**"]\n  team: ["@lead"]\n', is_codeowners=False)


@pytest.mark.asyncio
async def test_explicit_empty_teams_still_unrequires() -> None:
    (requirement,) = build_requirements("- paths: ['gen/**']\n  teams: []\n", is_codeowners=False)
    assert await requirement.is_satisfied([], TeamMembershipCache())
