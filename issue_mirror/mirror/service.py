import logging

from issue_mirror.common.exceptions import GitHubAPIException, MirrorException
from issue_mirror.constants import (
    FIRST_PAGE,
    ISSUE_STATE,
    PER_PAGE,
    SORT_DIRECTION,
    SORT_FIELD,
)
from issue_mirror.github.fetcher import GitHubIssuesFetcher
from issue_mirror.github.schemas import IssueListOptions
from issue_mirror.mirror.schemas import MirrorResult
from issue_mirror.mirror.writer import MirrorWriter
from issue_mirror.store.locator import IssueStore

default_logger = logging.getLogger(__name__)


class IssueMirrorService:
    """Mirrors every open issue of one repository, one page at a time."""

    def __init__(
        self,
        *,
        store: IssueStore,
        fetcher: GitHubIssuesFetcher,
        repo_owner: str,
        repo_name: str,
        logger: logging.Logger = default_logger,
    ):
        self.fetcher = fetcher
        self.repo_owner = repo_owner
        self.repo_name = repo_name
        self.logger = logger
        self.writer = MirrorWriter(
            store=store,
            fetcher=fetcher,
            repo_owner=repo_owner,
            repo_name=repo_name,
            logger=logger,
        )

    async def mirror(self) -> MirrorResult:
        result = MirrorResult()
        options = IssueListOptions(
            page=FIRST_PAGE,
            per_page=PER_PAGE,
            state=ISSUE_STATE,
            sort=SORT_FIELD,
            direction=SORT_DIRECTION,
        )

        while True:
            self.logger.debug(
                f"list issues({self.repo_owner}, {self.repo_name}, {options.stringify()})"
            )
            try:
                page = await self.fetcher.list_issues_page(
                    self.repo_owner, self.repo_name, options
                )
            except GitHubAPIException as e:
                raise GitHubAPIException(
                    f"listing issues; page {options.page}: {e}", status=e.status
                ) from e
            result.issue_pages += 1

            try:
                result.comments_written += await self.writer.write_issues(page.items)
            except MirrorException as e:
                self.logger.error(f"writing issues; page {options.page}: {e}")
                raise
            result.issues_written += len(page.items)

            if page.next_page == 0:
                self.logger.info("no more pages")
                break
            options = options.model_copy(update={"page": page.next_page})

        self.logger.info(
            f"mirrored {result.issues_written} issues and {result.comments_written} comments "
            f"from {result.issue_pages} pages"
        )
        return result
