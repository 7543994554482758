"""Filter and aggregate stage turning platform data into usage entries."""
from typing import Callable, Dict, Iterable, List, Optional
from ..config import MS_PER_MINUTE, debug_log
from ..exceptions import DescriptorNotFound
from ..models import ApplicationDescriptor, AppUsageEntry, RawUsageRecord
from .categorizer import Categorizer

DescriptorLookup = Callable[[str], ApplicationDescriptor]


def descriptor_lookup(descriptors: Iterable[ApplicationDescriptor]) -> DescriptorLookup:
    """
    Index one installed-applications snapshot for lookup by package id.

    The returned callable raises DescriptorNotFound for unknown packages.
    """
    index: Dict[str, ApplicationDescriptor] = {d.package_id: d for d in descriptors}

    def lookup(package_id: str) -> ApplicationDescriptor:
        try:
            return index[package_id]
        except KeyError:
            raise DescriptorNotFound(package_id) from None

    return lookup


class UsageService:
    """Filters, labels and converts platform records to AppUsageEntry rows."""

    def __init__(self, categorizer: Optional[Categorizer] = None,
                 min_foreground_ms: int = MS_PER_MINUTE) -> None:
        self.categorizer = categorizer or Categorizer()
        self.min_foreground_ms = min_foreground_ms

    def build_usage_entries(
        self,
        records: Iterable[RawUsageRecord],
        lookup: DescriptorLookup
    ) -> List[AppUsageEntry]:
        """
        Convert raw usage records into entries for user applications.

        A record is kept only if its foreground time is strictly above the
        threshold and it resolves to a non-system application. Records whose
        package cannot be resolved are skipped. Input order is preserved.
        """
        entries: List[AppUsageEntry] = []
        for record in records:
            if record.total_foreground_ms <= self.min_foreground_ms:
                continue

            try:
                descriptor = lookup(record.package_id)
            except DescriptorNotFound:
                debug_log(f"Skipping {record.package_id}: not installed")
                continue

            if descriptor.is_system:
                continue

            entries.append(AppUsageEntry(
                package_id=record.package_id,
                display_name=descriptor.display_name,
                total_foreground_minutes=record.total_foreground_ms // MS_PER_MINUTE,
                last_used_ms=record.last_used_ms,
                category=self.categorizer.categorize(record.package_id),
            ))
        return entries

    def build_installed_entries(
        self,
        descriptors: Iterable[ApplicationDescriptor]
    ) -> List[AppUsageEntry]:
        """Every user application with zero-valued usage fields."""
        return [
            AppUsageEntry(
                package_id=d.package_id,
                display_name=d.display_name,
                total_foreground_minutes=0,
                last_used_ms=0,
                category=self.categorizer.categorize(d.package_id),
            )
            for d in descriptors
            if not d.is_system
        ]
