from typing import Generic, TypeVar
from pydantic import BaseModel, ConfigDict


class GithubIssueComment(BaseModel):
    # Upstream fields are kept verbatim so the mirrored file matches the API.
    model_config = ConfigDict(extra="allow")

    id: int


class GithubIssue(BaseModel):
    model_config = ConfigDict(extra="allow")

    number: int
    comments: int = 0


T = TypeVar("T", bound=BaseModel)


class Page(BaseModel, Generic[T]):
    items: list[T]
    next_page: int = 0


class ListOptions(BaseModel):
    page: int
    per_page: int

    def to_params(self) -> dict[str, str]:
        return {
            key: str(value)
            for key, value in self.model_dump().items()
            if value is not None
        }

    def stringify(self) -> str:
        fields = ", ".join(
            f"{key}={value!r}" if isinstance(value, str) else f"{key}={value}"
            for key, value in self.model_dump().items()
        )
        return f"{type(self).__name__}{{{fields}}}"


class IssueListOptions(ListOptions):
    state: str
    sort: str
    direction: str


class CommentListOptions(ListOptions):
    sort: str
    direction: str
