import argparse
import asyncio
import logging
import sys

from issue_mirror.common.exceptions import MirrorException
from issue_mirror.common.log_buffer import create_run_logger
from issue_mirror.config import Settings, get_settings
from issue_mirror.constants import REPO_NAME, REPO_OWNER
from issue_mirror.github.client import GitHubClient
from issue_mirror.github.fetcher import GitHubIssuesFetcher
from issue_mirror.mirror.schemas import MirrorResult
from issue_mirror.mirror.service import IssueMirrorService
from issue_mirror.store.locator import open_store

logger = logging.getLogger(__name__)


async def run_mirror(settings: Settings, run_logger: logging.Logger) -> MirrorResult:
    store = open_store(settings.ISSUES_CACHE_DIR)
    run_logger.debug(f"mirroring {REPO_OWNER}/{REPO_NAME} into {store.root}")

    async with GitHubClient(
        concurrent_requests=settings.MAX_CONCURRENT_REQUESTS,
        user_agent=settings.USER_AGENT,
        github_api_version=settings.GITHUB_API_VERSION,
        github_token=settings.GITHUB_TOKEN,
    ) as github_client:
        service = IssueMirrorService(
            store=store,
            fetcher=GitHubIssuesFetcher(github_client=github_client),
            repo_owner=REPO_OWNER,
            repo_name=REPO_NAME,
            logger=run_logger,
        )
        return await service.mirror()


def main(argv: list[str] | None = None) -> int:
    argparse.ArgumentParser(
        description=f"Mirror the open issues of {REPO_OWNER}/{REPO_NAME} "
        "and their comments into local JSON files."
    ).parse_args(argv)

    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)
    # The run log keeps request lines for the fatal-error dump.
    run_logger, log_buffer = create_run_logger(logging.DEBUG)

    try:
        asyncio.run(run_mirror(settings, run_logger))
    except MirrorException as e:
        run_logger.error(f"fatal: {e}")
        print(log_buffer.getvalue(), file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Unexpected error during mirror run")
        run_logger.error(f"fatal: unexpected error: {e}")
        print(log_buffer.getvalue(), file=sys.stderr)
        return 1

    print(log_buffer.getvalue(), file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
