"""Supabase repository for user profiles and targets."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from menu_planner.domain.targets import Profile, StoredProfile, Targets
from menu_planner.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile persistence."""

    client: Client

    def upsert_profile(
        self, user_id: UUID, profile: Profile, targets: Targets
    ) -> None:
        """Merge profile and targets into the user's row."""
        self.client.table("user_profiles").upsert(
            {
                "user_id": str(user_id),
                "profile": profile.to_dict(),
                "targets": targets.to_dict(),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()

    def get_profile(self, user_id: UUID) -> StoredProfile | None:
        """Return the stored profile for a user."""
        response = (
            self.client.table("user_profiles")
            .select("profile, targets")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        if not row.get("profile"):
            return None
        targets = row.get("targets")
        return StoredProfile(
            profile=Profile.from_dict(row["profile"]),
            targets=Targets.from_dict(targets) if targets else None,
        )
