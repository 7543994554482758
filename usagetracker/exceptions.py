class UsageTrackerError(Exception):
    pass


class PermissionDenied(UsageTrackerError):
    """Usage-access rights have not been granted to the caller."""
    pass


class PlatformUnavailable(UsageTrackerError):
    """The platform's usage or package service cannot be reached."""
    pass


class DescriptorNotFound(UsageTrackerError):
    """A package reported in usage records is not an installed application."""

    def __init__(self, package_id: str):
        super().__init__(f"Application not found: {package_id}")
        self.package_id = package_id
