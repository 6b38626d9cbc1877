class MirrorException(Exception):
    """Base class for every error that aborts a mirror run."""

    def __init__(self, message: str):
        super().__init__(message)


class StoreOpenException(MirrorException):
    def __init__(self, root: str, reason: str):
        self.root = root
        super().__init__(f"Cannot open issue cache folder '{root}': {reason}")


class GitHubAPIException(MirrorException):
    def __init__(self, message: str, status: int | None = None):
        self.status = status
        super().__init__(message)


class MirrorWriteException(MirrorException):
    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Failed to write {path}: {reason}")


class MirrorSerializationException(MirrorException):
    def __init__(self, kind: str, identifier: int, reason: str):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"Failed to serialize {kind} {identifier}: {reason}")
