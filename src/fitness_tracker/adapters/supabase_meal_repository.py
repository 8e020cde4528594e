"""Supabase repository for meal entries."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.meals import MealEntry, MealPortion, MealType
from fitness_tracker.services.meals import MealRepository

_MEAL_COLUMNS = (
    "id, user_id, date, food_name, servings, calories, protein, fats, carbs, "
    "meal_type, created_at"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meal entries."""

    client: Client

    def create_meal_entry(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        food_name: str,
        portion: MealPortion,
        meal_type: MealType | None,
    ) -> MealEntry:
        """Create a meal entry row and return it."""
        response = (
            self.client.table("meal_entries")
            .insert(
                {
                    "user_id": str(user_id),
                    "date": day.isoformat(),
                    "food_name": food_name,
                    "servings": portion.servings,
                    "calories": portion.calories,
                    "protein": portion.protein_g,
                    "fats": portion.fats_g,
                    "carbs": portion.carbs_g,
                    "meal_type": str(meal_type) if meal_type else None,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal entry")
        return _parse_entry(response.data[0])

    def get_meal_entry(self, meal_id: UUID) -> MealEntry | None:
        """Return a meal entry by id."""
        response = (
            self.client.table("meal_entries")
            .select(_MEAL_COLUMNS)
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_meal_entries(self, user_id: UUID, day: date) -> list[MealEntry]:
        """Return a user's entries for a date, newest first."""
        response = (
            self.client.table("meal_entries")
            .select(_MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def list_meal_entries_between(
        self, user_id: UUID, start: date, end: date
    ) -> list[MealEntry]:
        """Return entries with start <= date < end."""
        response = (
            self.client.table("meal_entries")
            .select(_MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lt("date", end.isoformat())
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def list_recent_meal_entries(self, user_id: UUID, limit: int) -> list[MealEntry]:
        """Return the most recent entries."""
        response = (
            self.client.table("meal_entries")
            .select(_MEAL_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def delete_meal_entry(self, meal_id: UUID) -> None:
        """Delete a meal entry row."""
        self.client.table("meal_entries").delete().eq("id", str(meal_id)).execute()


def _parse_entry(row: dict[str, object]) -> MealEntry:
    meal_type = row.get("meal_type")
    created_at = row.get("created_at")
    return MealEntry(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        date=date.fromisoformat(str(row["date"])[:10]),
        food_name=str(row.get("food_name") or "Unknown Food"),
        servings=float(row.get("servings") or 1.0),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein") or 0.0),
        fats_g=float(row.get("fats") or 0.0),
        carbs_g=float(row.get("carbs") or 0.0),
        meal_type=MealType(meal_type) if meal_type else None,
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )
