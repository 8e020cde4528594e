"""Biometric profile and nutrition target service."""

import logging
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.energy import EnergyConfig, profile_from_row
from fitness_tracker.domain.errors import MissingInputError
from fitness_tracker.domain.macros import DEFAULT_TARGETS, nutrition_targets
from fitness_tracker.domain.models import BiometricProfile, NutritionTargets

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for biometric profiles."""

    def get_profile_row(self, user_id: UUID) -> dict[str, object] | None:
        """Return the raw stored profile row, if any."""

    def save_profile(self, user_id: UUID, profile: BiometricProfile) -> None:
        """Create or replace the stored profile."""


@dataclass
class ProfileService:
    """Loads profiles and derives nutrition targets from them."""

    repository: ProfileRepository
    energy_config: EnergyConfig = field(default_factory=EnergyConfig)
    default_targets: NutritionTargets = DEFAULT_TARGETS

    def get_profile(self, user_id: UUID) -> BiometricProfile | None:
        """Return the user's profile, or None when it is absent or incomplete."""
        row = self.repository.get_profile_row(user_id)
        if row is None:
            return None
        try:
            return profile_from_row(row)
        except MissingInputError as exc:
            _logger.warning(
                "Incomplete profile for user %s: %s", user_id, ", ".join(exc.fields)
            )
            return None

    def save_profile(self, user_id: UUID, profile: BiometricProfile) -> None:
        """Persist a profile entered on the settings form."""
        self.repository.save_profile(user_id, profile)

    def get_targets(self, user_id: UUID) -> NutritionTargets:
        """Return targets for the user, degrading to defaults when undeterminable."""
        profile = self.get_profile(user_id)
        targets = nutrition_targets(profile, self.energy_config, self.default_targets)
        if profile is None:
            _logger.info("Using default nutrition targets for user %s", user_id)
        return targets

