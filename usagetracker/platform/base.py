"""Base platform abstraction."""
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional
from ..exceptions import PlatformUnavailable
from ..models import ApplicationDescriptor, RawUsageRecord, UsageWindow


class PlatformBase(ABC):
    """
    Abstract source of usage records and installed applications.

    Permission state moves from not granted to granted outside this
    process (the user flips it in system settings); it is only observed
    by calling has_usage_permission() again.
    """

    @abstractmethod
    def query_usage(self, window: UsageWindow) -> List[RawUsageRecord]:
        """
        Return per-application foreground time within window.

        Raises:
            PermissionDenied: usage access not granted
            PlatformUnavailable: usage service unreachable
        """
        pass

    @abstractmethod
    def list_installed_applications(self) -> List[ApplicationDescriptor]:
        """
        Return a snapshot of installed applications.

        Raises:
            PlatformUnavailable: package service unreachable
        """
        pass

    @abstractmethod
    def has_usage_permission(self) -> bool:
        """Return True if usage access is granted. Never raises."""
        pass

    @abstractmethod
    def request_usage_permission(self) -> bool:
        """
        Ask for usage access.

        Where the user has to act in system settings, start that flow and
        return False right away instead of waiting for the outcome.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Platform name for logging."""
        pass

    # Shared helpers
    def _check_command(self, cmd: str) -> bool:
        """Check if command exists."""
        try:
            subprocess.run(["which", cmd], capture_output=True, check=True)
            return True
        except (subprocess.CalledProcessError, FileNotFoundError):
            return False

    def _run_command(self, cmd: List[str], timeout: Optional[float] = None) -> str:
        """
        Execute command and return its stdout.

        Raises:
            PlatformUnavailable: command missing, failing or timing out
        """
        try:
            result = subprocess.run(
                cmd, check=True, capture_output=True, text=True, timeout=timeout
            )
        except FileNotFoundError as e:
            raise PlatformUnavailable(f"{cmd[0]} not found") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
            raise PlatformUnavailable(f"{' '.join(cmd)} failed: {detail}") from e
        except subprocess.TimeoutExpired as e:
            raise PlatformUnavailable(f"{' '.join(cmd)} timed out after {timeout}s") from e
        return result.stdout
