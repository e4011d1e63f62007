"""Error kinds raised during an update check."""


class UpdateCheckError(Exception):
    """Base class for failures of a single update check."""


class TransportError(UpdateCheckError):
    """Feed fetch or browser version lookup failed."""


class FeedFormatError(UpdateCheckError):
    """Release feed has no usable entry for the target platform."""


class NotificationError(UpdateCheckError):
    """Opening a page or showing an alert in it failed."""
