from .auth import select_auth_token
from .client import GitHubResponse, GitHubRestClient
from .context import PullRequestContext, load_pull_request_context

__all__ = [
    "GitHubResponse",
    "GitHubRestClient",
    "PullRequestContext",
    "load_pull_request_context",
    "select_auth_token",
]
