"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ChangeFeedError(AdapterError):
    """The push-notification backend could not be reached."""

    pass
