from pydantic import BaseModel


class MirrorResult(BaseModel):
    issues_written: int = 0
    comments_written: int = 0
    issue_pages: int = 0
