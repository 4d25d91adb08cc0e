"""Error types raised by PushUP components."""


class PushupError(Exception):
    """Base class for all PushUP errors."""


class NotFound(PushupError):
    """A requested object, commit, branch or repository does not exist."""


class AlreadyExists(PushupError):
    """A branch or repository with the same name already exists."""


class InvalidOperation(PushupError):
    """The operation is not allowed in the current repository state."""


class IoError(PushupError):
    """A working-tree or repository file could not be read or written."""


class EmptyOperation(PushupError):
    """The operation had nothing to do (e.g. commit with an empty index)."""


class RepositoryLocked(InvalidOperation):
    """Another process holds the repository write lock."""
