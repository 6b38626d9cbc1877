from typing import Any


def make_issue(number: int, comments: int = 0) -> dict[str, Any]:
    return {
        "id": 1000 + number,
        "number": number,
        "title": f"Issue {number}",
        "body": f"Body of issue {number}",
        "state": "open",
        "comments": comments,
        "user": {"login": "octocat", "id": 1},
        "labels": [{"name": "bug"}],
        "created_at": "2016-01-01T00:00:00Z",
        "updated_at": "2016-01-02T00:00:00Z",
    }


def make_comment(comment_id: int) -> dict[str, Any]:
    return {
        "id": comment_id,
        "body": f"Comment {comment_id}",
        "user": {"login": "octocat", "id": 1},
        "created_at": "2016-01-03T00:00:00Z",
    }
