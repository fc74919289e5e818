"""Profile orchestration: finishing onboarding, editing profiles, logging entries.

Every profile write goes to the account registry and the session record
together (through ``AuthService.save_profile``). A weight change is mirrored
as a new biometrics entry so the weight history stays complete.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from ironpulse.core.storage.entry_log import EntryLog
from ironpulse.core.storage.models import AppEntry, BiometricEntry, UserProfile
from ironpulse.domains.fitness.domain_logic.auth import AuthService, Session
from ironpulse.domains.fitness.domain_logic.entries import build_biometric, latest_biometric
from ironpulse.domains.fitness.domain_logic.onboarding import OnboardingFlow, OnboardingStep

logger = logging.getLogger(__name__)

# Profile fields a user may edit after onboarding
EDITABLE_FIELDS = frozenset({
    "email",
    "age",
    "gender",
    "height",
    "weight",
    "goal_weight",
    "goal",
    "activity_level",
})


class ProfileService:
    """Coordinates profile writes with the entry log.

    Usage::

        service = ProfileService(auth, entry_log)
        flow = service.start_onboarding(session)
        ...
        service.advance_onboarding(session, flow)
    """

    def __init__(self, auth: AuthService, entry_log: EntryLog) -> None:
        self._auth = auth
        self._log = entry_log

    # ------------------------------------------------------------------
    # Onboarding
    # ------------------------------------------------------------------

    def start_onboarding(self, session: Session) -> OnboardingFlow:
        return OnboardingFlow(session.profile)

    def advance_onboarding(self, session: Session, flow: OnboardingFlow) -> OnboardingStep:
        """Advance ``flow``; on completion persist the profile and seed the weight history.

        Raises:
            MissingRequiredFieldError: If the current step is incomplete.
        """
        was_completed = flow.completed
        step = flow.advance()
        if step is OnboardingStep.COMPLETED and not was_completed:
            self.complete_onboarding(session, flow.result)
        return step

    def complete_onboarding(self, session: Session, profile: UserProfile) -> BiometricEntry | None:
        """Persist a finished onboarding profile.

        Returns:
            The initial biometrics entry, or None when no weight was given.
        """
        profile = replace(profile, onboarding_completed=True)
        entry = build_biometric(profile.weight, profile.height) if profile.weight is not None else None

        self._auth.save_profile(session, profile)
        logger.info("Onboarding completed for %s", profile.username)
        if entry is not None:
            self._log.append_entry(profile.username, entry)
        return entry

    # ------------------------------------------------------------------
    # Profile edits
    # ------------------------------------------------------------------

    def update_profile(self, session: Session, **changes: Any) -> UserProfile:
        """Apply ``changes`` to the session's profile and save it.

        A biometrics entry is appended when the new weight differs from the
        most recent biometrics entry (or there is none yet).

        Raises:
            ValueError: If a change names a field that cannot be edited.
            InvalidEntryError: If the new weight is not positive; nothing is
                written in that case.
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot edit profile field(s): {', '.join(sorted(unknown))}")

        updated = replace(session.profile, **changes)

        # Validate the weight before anything is written
        weight_entry = None
        if updated.weight is not None:
            latest = latest_biometric(self._log.get_entries(updated.username))
            if latest is None or latest.weight != updated.weight:
                weight_entry = build_biometric(updated.weight, updated.height)

        self._auth.save_profile(session, updated)
        if weight_entry is not None:
            self._log.append_entry(updated.username, weight_entry)
            logger.info("Weight change logged for %s: %s kg", updated.username, updated.weight)
        return updated

    # ------------------------------------------------------------------
    # Entries for the signed-in user
    # ------------------------------------------------------------------

    def entries(self, session: Session) -> list[AppEntry]:
        return self._log.get_entries(session.username)

    def log_entry(self, session: Session, entry: AppEntry) -> list[AppEntry]:
        return self._log.append_entry(session.username, entry)

    def delete_entry(self, session: Session, entry_id: str) -> bool:
        return self._log.delete_entry(session.username, entry_id)
