"""Supabase repository for biometric profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.models import BiometricProfile
from fitness_tracker.services.profiles import ProfileRepository

_PROFILE_COLUMNS = "age, weight, height, sex, goal, goal_speed, calorie_goal_override"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the user_data table."""

    client: Client

    def get_profile_row(self, user_id: UUID) -> dict[str, object] | None:
        """Return the raw profile row for a user."""
        response = (
            self.client.table("user_data")
            .select(_PROFILE_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]

    def save_profile(self, user_id: UUID, profile: BiometricProfile) -> None:
        """Create or replace the user's profile row."""
        response = (
            self.client.table("user_data")
            .upsert(
                {
                    "user_id": str(user_id),
                    "age": profile.age,
                    "weight": profile.weight_kg,
                    "height": profile.height_cm,
                    "sex": str(profile.sex),
                    "goal": str(profile.goal),
                    "goal_speed": str(profile.goal_speed),
                    "calorie_goal_override": profile.calorie_goal_override,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save profile")
