import asyncio
import logging
from types import TracebackType
from typing import Any, Type
from urllib.parse import parse_qs, urlparse
from aiohttp import ClientError, ClientSession

from issue_mirror.common.exceptions import GitHubAPIException


logger = logging.getLogger(__name__)


class GitHubClient:
    def __init__(
        self,
        *,
        concurrent_requests: int,
        user_agent: str,
        github_api_version: str,
        github_token: str | None,
    ):
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": github_api_version,
            "User-Agent": user_agent,
        }
        # A missing token is not checked here; GitHub rejects or limits the call.
        if github_token:
            headers["Authorization"] = f"Bearer {github_token}"

        self.session: ClientSession = ClientSession(headers=headers)
        self.semaphore = asyncio.Semaphore(concurrent_requests)

    async def __aenter__(self):
        return self

    async def __aexit__(
        self, exc_type: Type[Exception], exc: Exception, tb: TracebackType
    ):
        if self.session:
            await self.session.close()

    def parse_link_header(self, header: str) -> dict[str, str]:
        links = header.split(", ")
        link_dict: dict[str, str] = {}
        for link in links:
            parts = link.split("; ")
            if len(parts) < 2:
                continue
            url_part = parts[0].strip("<>")
            rel_part = parts[1]
            rel = rel_part.split("=")[1].strip('"')
            link_dict[rel] = url_part
        return link_dict

    def parse_next_page(self, headers: dict[str, str]) -> int:
        """Page number of the rel="next" link, or 0 on the last page."""
        # Header names are case-insensitive.
        link_header = next(
            (value for name, value in headers.items() if name.lower() == "link"),
            None,
        )
        if not link_header:
            return 0

        next_url = self.parse_link_header(link_header).get("next")
        if not next_url:
            return 0

        page = parse_qs(urlparse(next_url).query).get("page")
        if not page:
            return 0
        try:
            return int(page[0])
        except ValueError:
            raise GitHubAPIException(f"Malformed next page link: {next_url}")

    async def request(
        self,
        method: str,
        url: str,
        params: dict[str, str] | None = None,
    ) -> tuple[Any, dict[str, str]]:
        async with self.semaphore:
            try:
                async with self.session.request(method, url, params=params) as response:
                    if response.status in (429, 403):
                        rate_limit_remaining = response.headers.get(
                            "X-RateLimit-Remaining"
                        )
                        rate_limit_reset = response.headers.get("X-RateLimit-Reset")
                        retry_after = response.headers.get("Retry-After")
                        if retry_after:
                            raise GitHubAPIException(
                                f"Rate limit exceeded for {url}; retry after {retry_after} seconds",
                                status=response.status,
                            )
                        if rate_limit_remaining == "0":
                            raise GitHubAPIException(
                                f"Rate limit exceeded for {url}; resets at {rate_limit_reset}",
                                status=response.status,
                            )
                        raise GitHubAPIException(
                            f"Access to {url} is forbidden", status=response.status
                        )
                    elif response.status == 404:
                        raise GitHubAPIException(
                            f"Resource not found at {url}", status=response.status
                        )
                    elif response.status == 401:
                        raise GitHubAPIException(
                            f"GITHUB_TOKEN is not authorized to access {url}",
                            status=response.status,
                        )
                    response.raise_for_status()
                    data = await response.json()
                    return data, dict(response.headers)
            except GitHubAPIException:
                raise
            except ClientError as e:
                logger.exception("HTTP request failed")
                raise GitHubAPIException(f"Request to {url} failed: {e}") from e
            except ValueError as e:
                raise GitHubAPIException(f"Malformed response from {url}: {e}") from e
