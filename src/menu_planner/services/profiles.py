"""Profile and target persistence service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from menu_planner.domain.targets import Profile, StoredProfile, Targets
from menu_planner.services.targets import compute_targets


class ProfileRepository(Protocol):
    """Persistence interface for profiles keyed by user id."""

    def upsert_profile(
        self, user_id: UUID, profile: Profile, targets: Targets
    ) -> None:
        """Merge the profile and targets into the user's record."""

    def get_profile(self, user_id: UUID) -> StoredProfile | None:
        """Return the stored profile, if any."""


@dataclass
class ProfileService:
    """Application service for saving profiles with their targets."""

    repository: ProfileRepository

    def save_profile(self, user_id: UUID, profile: Profile) -> Targets | None:
        """Compute targets and persist them; invalid profiles are not stored."""
        targets = compute_targets(profile)
        if targets is None:
            return None
        self.repository.upsert_profile(user_id, profile, targets)
        return targets

    def load_profile(self, user_id: UUID) -> StoredProfile | None:
        """Return the stored profile, recomputing targets when they are missing."""
        stored = self.repository.get_profile(user_id)
        if stored is None or stored.targets is not None:
            return stored
        return StoredProfile(
            profile=stored.profile, targets=compute_targets(stored.profile)
        )
