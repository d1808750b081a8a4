"""Owner domain model."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Owner:
    """Account holder identity for a link."""

    owner_id: str
    link_id: str
    display_name: str = ""
    full_name: str = ""
    email: Optional[str] = None

    @property
    def preferred_name(self) -> Optional[str]:
        """Display name if set, else full name, else None."""
        return self.display_name.strip() or self.full_name.strip() or None


def select_owner_name(owners: list[Owner], placeholder: str) -> str:
    """
    Pick the single owner name surfaced for a link.

    Only the first owner is authoritative: its display name, else its
    full name, else the placeholder.
    """
    if owners:
        name = owners[0].preferred_name
        if name:
            return name
    return placeholder
