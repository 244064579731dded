from legalsift.exceptions import UpstreamFailureError


class CompletionError(UpstreamFailureError):
    """Raised when the completion provider answers without usable content."""


class CompletionNetworkError(UpstreamFailureError):
    """Raised when the completion provider cannot be reached or rejects the call."""
