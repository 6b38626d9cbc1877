import asyncio
import logging
import os
import time
from pathlib import Path
from typing import Awaitable, Callable, Iterable, TypeVar

from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from issue_mirror.common.exceptions import (
    GitHubAPIException,
    MirrorSerializationException,
    MirrorWriteException,
)
from issue_mirror.constants import (
    DIR_MODE,
    FILE_MODE,
    PER_PAGE,
    FIRST_PAGE,
    SORT_DIRECTION,
    SORT_FIELD,
)
from issue_mirror.github.fetcher import GitHubIssuesFetcher
from issue_mirror.github.schemas import (
    CommentListOptions,
    GithubIssue,
    GithubIssueComment,
)
from issue_mirror.store.locator import IssueStore

T = TypeVar("T")

default_logger = logging.getLogger(__name__)


async def run_batch(
    items: Iterable[T], write_item: Callable[[T], Awaitable[int]]
) -> int:
    """Runs ``write_item`` for every item concurrently and waits for all of them.

    Returns the sum of the results. If any item fails, the first failure to
    complete is raised once every other item has finished.
    """
    tasks = [asyncio.create_task(write_item(item)) for item in items]
    first_error: BaseException | None = None
    total = 0
    for task in asyncio.as_completed(tasks):
        try:
            total += await task
        except Exception as e:
            if first_error is None:
                first_error = e
    if first_error is not None:
        raise first_error
    return total


def _write_file(path: Path, data: bytes) -> None:
    path.parent.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
    with os.fdopen(fd, "wb") as f:
        f.write(data)


async def write_json_file(
    path: Path, record: BaseModel, kind: str, identifier: int
) -> None:
    try:
        data = record.model_dump_json().encode("utf-8")
    except (PydanticSerializationError, ValueError) as e:
        raise MirrorSerializationException(kind, identifier, str(e)) from e

    try:
        await asyncio.to_thread(_write_file, path, data)
    except OSError as e:
        raise MirrorWriteException(str(path), e.strerror or str(e)) from e


class MirrorWriter:
    def __init__(
        self,
        *,
        store: IssueStore,
        fetcher: GitHubIssuesFetcher,
        repo_owner: str,
        repo_name: str,
        logger: logging.Logger = default_logger,
    ):
        self.store = store
        self.fetcher = fetcher
        self.repo_owner = repo_owner
        self.repo_name = repo_name
        self.logger = logger

    async def write_issues(self, issues: list[GithubIssue]) -> int:
        """Writes a page of issues and their comments; returns comments written."""
        self.logger.info(f"processing {len(issues)} issues")
        return await run_batch(issues, self.write_issue)

    async def write_issue(self, issue: GithubIssue) -> int:
        num = issue.number
        start = time.monotonic()
        self.logger.debug(f"started processing {num}")

        await write_json_file(self.store.issue_file(num), issue, "issue", num)

        written = 0
        if issue.comments > 0:
            written = await self._mirror_comments(issue)

        self.logger.info(
            f"finished processing {num} in {time.monotonic() - start:.3f}s"
        )
        return written

    async def _mirror_comments(self, issue: GithubIssue) -> int:
        num = issue.number
        comments_dir = self.store.comments_dir(num)
        try:
            await asyncio.to_thread(
                comments_dir.mkdir, mode=DIR_MODE, parents=True, exist_ok=True
            )
        except OSError as e:
            raise MirrorWriteException(str(comments_dir), e.strerror or str(e)) from e

        options = CommentListOptions(
            page=FIRST_PAGE,
            per_page=PER_PAGE,
            sort=SORT_FIELD,
            direction=SORT_DIRECTION,
        )
        written = 0
        while True:
            self.logger.debug(
                f"list comments({self.repo_owner}, {self.repo_name}, {num}, {options.stringify()})"
            )
            try:
                page = await self.fetcher.list_comments_page(
                    self.repo_owner, self.repo_name, num, options
                )
            except GitHubAPIException as e:
                raise GitHubAPIException(
                    f"listing comments for issue={num}; page {options.page}: {e}",
                    status=e.status,
                ) from e

            written += await self.write_comments(issue, page.items)
            if page.next_page == 0:
                break
            options = options.model_copy(update={"page": page.next_page})
        return written

    async def write_comments(
        self, issue: GithubIssue, comments: list[GithubIssueComment]
    ) -> int:
        self.logger.debug(
            f"processing {len(comments)} comments for issue={issue.number}"
        )

        async def write_comment(comment: GithubIssueComment) -> int:
            path = self.store.comment_file(issue.number, comment.id)
            await write_json_file(path, comment, "comment", comment.id)
            return 1

        return await run_batch(comments, write_comment)
