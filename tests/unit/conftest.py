import logging
from typing import AsyncGenerator

import pytest

from issue_mirror.common.log_buffer import BufferedLogHandler, create_run_logger
from issue_mirror.github.client import GitHubClient
from issue_mirror.store.locator import IssueStore


@pytest.fixture
async def github_client() -> AsyncGenerator[GitHubClient, None]:
    async with GitHubClient(
        concurrent_requests=2,
        user_agent="test-agent",
        github_api_version="2022-11-28",
        github_token="test-token",
    ) as client:
        yield client


@pytest.fixture
def store(tmp_path) -> IssueStore:
    return IssueStore(tmp_path)


@pytest.fixture
def run_logger() -> tuple[logging.Logger, BufferedLogHandler]:
    return create_run_logger(logging.DEBUG, name="tests.issue_mirror.run")
