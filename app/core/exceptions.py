"""Domain errors raised by the access layer and mapped to HTTP responses in main."""


class AccessError(Exception):
    """Base class for access-layer failures."""

    status_code = 400

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class PermissionDenied(AccessError):
    """A write was blocked by the row policies."""

    status_code = 403

    def __init__(self, detail: str = "Permission denied") -> None:
        super().__init__(detail)


class NotFound(AccessError):
    """The requested row is absent or not visible to the actor."""

    status_code = 404

    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(detail)


class Conflict(AccessError):
    """A uniqueness constraint rejected the write."""

    status_code = 409


class ValidationError(AccessError):
    """
    A write payload failed one or more invariants.

    Every failing check contributes a reason; `reason` is the first one.
    """

    status_code = 422

    def __init__(self, *reasons: str) -> None:
        if not reasons:
            raise ValueError("ValidationError requires at least one reason")
        super().__init__("; ".join(reasons))
        self.reasons = list(reasons)

    @property
    def reason(self) -> str:
        """The first failing reason."""
        return self.reasons[0]
