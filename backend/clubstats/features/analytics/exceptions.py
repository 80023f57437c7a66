"""Analytics error types."""


class AnalyticsError(Exception):
    """Base class for analytics failures."""


class DataSourceError(AnalyticsError):
    """A dataset could not be read from the data store."""

    def __init__(self, dataset: str, reason: str):
        self.dataset = dataset
        self.reason = reason
        super().__init__(f"Failed to load {dataset}: {reason}")


class AnalyticsUnavailableError(AnalyticsError):
    """Single-entity analytics aborted because a read failed."""


class MemberNotFoundError(AnalyticsError):
    """Requested member does not exist."""

    def __init__(self, member_id: int):
        self.member_id = member_id
        super().__init__(f"Member not found: {member_id}")
