import logging
from typing import Any

from pydantic import ValidationError

from issue_mirror.common.exceptions import GitHubAPIException
from issue_mirror.constants import GITHUB_API_URL
from issue_mirror.github.client import GitHubClient
from issue_mirror.github.schemas import (
    CommentListOptions,
    GithubIssue,
    GithubIssueComment,
    IssueListOptions,
    Page,
)

logger = logging.getLogger(__name__)


class GitHubIssuesFetcher:
    def __init__(
        self,
        *,
        github_client: GitHubClient,
    ):
        self.client = github_client

    async def _fetch_page(
        self, url: str, params: dict[str, str]
    ) -> tuple[list[Any], int]:
        data, headers = await self.client.request("GET", url, params=params)
        if not isinstance(data, list):
            raise GitHubAPIException(
                f"Expected a list from {url}, got {type(data).__name__}"
            )
        return data, self.client.parse_next_page(headers)

    async def list_issues_page(
        self, repo_owner: str, repo_name: str, options: IssueListOptions
    ) -> Page[GithubIssue]:
        url = f"{GITHUB_API_URL}/repos/{repo_owner}/{repo_name}/issues"
        data, next_page = await self._fetch_page(url, options.to_params())
        try:
            issues = [GithubIssue.model_validate(item) for item in data]
        except ValidationError as e:
            raise GitHubAPIException(f"Malformed issue in response from {url}: {e}")
        return Page[GithubIssue](items=issues, next_page=next_page)

    async def list_comments_page(
        self,
        repo_owner: str,
        repo_name: str,
        issue_number: int,
        options: CommentListOptions,
    ) -> Page[GithubIssueComment]:
        url = f"{GITHUB_API_URL}/repos/{repo_owner}/{repo_name}/issues/{issue_number}/comments"
        data, next_page = await self._fetch_page(url, options.to_params())
        try:
            comments = [GithubIssueComment.model_validate(item) for item in data]
        except ValidationError as e:
            raise GitHubAPIException(
                f"Malformed comment in response from {url}: {e}"
            )
        return Page[GithubIssueComment](items=comments, next_page=next_page)
