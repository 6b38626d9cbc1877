REPO_OWNER = "jekyll"
REPO_NAME = "jekyll"

GITHUB_API_URL = "https://api.github.com"

PER_PAGE = 100
FIRST_PAGE = 0

ISSUE_STATE = "open"
SORT_FIELD = "created"
SORT_DIRECTION = "asc"

DIR_MODE = 0o755
FILE_MODE = 0o644

LOG_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
