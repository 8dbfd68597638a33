# ---------------------------------
# TYPED EXCEPTIONS
# ---------------------------------


class ConnectionProvisioningError(RuntimeError):
    """Raised when no pooled connection could be obtained for a request."""
    pass
