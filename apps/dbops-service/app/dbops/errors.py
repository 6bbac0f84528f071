class DBOpsError(Exception):
    """A reconciliation operation failed; ``__cause__`` holds the underlying error."""


class NotFoundError(DBOpsError):
    """A referenced object (profile, role, user) does not exist."""


class GrantSubsumedError(DBOpsError):
    """A GRANT ran but ClickHouse recorded no row for the requested tuple.

    This happens when a broader grant already covers the request; the
    overlapping grants and one explanation line per overlap are attached.
    """

    def __init__(self, candidate, existing: list, explanations: list[str]):
        self.candidate = candidate
        self.existing = existing
        self.explanations = explanations
        lines = ["grant was not created because it is already covered by an existing grant"]
        lines += explanations
        super().__init__("\n".join(lines))


class InvalidRequestError(DBOpsError):
    """The statement could not be built from the given input; nothing was sent."""
