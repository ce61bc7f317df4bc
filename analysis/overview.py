"""Anbindung an den Host: Profil-Store und abgeleitete Werte für die Oberfläche.

Der Kern (Hash, Baseline, Issue-Aggregation, Kennzahlen) bekommt seinen
Zustand ausschließlich als Parameter. ``ProfileStore`` ist ein einfacher
In-Memory-Host; jede andere Quelle, die ``ProfileHost`` erfüllt, funktioniert
ebenso.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Protocol

from analysis.dirty_state import BaselineTracker
from analysis.group_resolver import resolve_group_set_groups
from analysis.issues import IssueCard, IssueSummaryItem, build_issue_cards, build_issue_summary
from analysis.roster_metrics import (
    AssignmentCoverageSummary, RosterInsights, build_roster_insights,
    get_assignment_coverage_summary, get_incomplete_class_wide_assignments,
)
from config.schema import RosterCheckConfig
from models.profile import ProfileDocument, saveable_state
from models.validation import ValidationResults

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class ProfileHost(Protocol):
    """Zugriffe, die der Kern vom Host benötigt."""

    def get_active_profile_id(self) -> Optional[str]: ...

    def get_document(self) -> Optional[ProfileDocument]: ...

    def get_saveable_document_state(self) -> Optional[dict[str, Any]]: ...

    def get_validation_results(self) -> ValidationResults: ...

    def subscribe(self, listener: Listener) -> Callable[[], None]: ...


class ProfileStore:
    """In-Memory-Host. Alle Schreibzugriffe laufen seriell über die Methoden."""

    def __init__(self) -> None:
        self._active_profile_id: Optional[str] = None
        self._document: Optional[ProfileDocument] = None
        self._validation = ValidationResults()
        self._listeners: list[Listener] = []

    # ─── Lesen ───

    def get_active_profile_id(self) -> Optional[str]:
        return self._active_profile_id

    def get_document(self) -> Optional[ProfileDocument]:
        return self._document

    def get_saveable_document_state(self) -> Optional[dict[str, Any]]:
        return saveable_state(self._document)

    def get_validation_results(self) -> ValidationResults:
        return self._validation

    # ─── Schreiben ───

    def load_profile(self, profile_id: str, document: ProfileDocument) -> None:
        """Profil laden: Dokument wird komplett ersetzt, Validierung zurückgesetzt."""
        self._active_profile_id = profile_id
        self._document = document
        self._validation = ValidationResults()
        self._notify()

    def switch_profile(self, profile_id: Optional[str]) -> None:
        """Nur das aktive Profil wechseln (Dokument folgt asynchron)."""
        self._active_profile_id = profile_id
        self._notify()

    def update_document(self, document: Optional[ProfileDocument]) -> None:
        self._document = document
        self._notify()

    def set_validation_results(self, results: ValidationResults) -> None:
        self._validation = results
        self._notify()

    # ─── Benachrichtigung ───

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Listener registrieren; gibt eine Abmeldefunktion zurück."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()


class ProfileOverview:
    """Abgeleitete Werte eines Profils: Dirty-Flag, Issue-Karten, Kennzahlen.

    Werte werden bei jedem Zugriff neu berechnet; gecacht wird nur die
    Baseline des Trackers.
    """

    def __init__(
        self,
        host: ProfileHost,
        config: Optional[RosterCheckConfig] = None,
    ) -> None:
        self._host = host
        self._config = config or RosterCheckConfig()
        self._tracker = BaselineTracker(
            host.get_saveable_document_state, self._config.tracker,
        )
        self._tracker.initialize(host.get_active_profile_id())
        self._unsubscribe = host.subscribe(self._on_change)

    @property
    def tracker(self) -> BaselineTracker:
        return self._tracker

    def _on_change(self) -> None:
        self._tracker.observe_profile(self._host.get_active_profile_id())

    def close(self) -> None:
        """Vom Host abmelden."""
        self._unsubscribe()

    # ─── Dirty-State ───

    @property
    def is_dirty(self) -> bool:
        return self._tracker.evaluate(self._host.get_active_profile_id())

    def initialize(self) -> None:
        """Nach dem Laden eines Profils aufrufen."""
        self._tracker.initialize(self._host.get_active_profile_id())

    def mark_clean(self) -> None:
        self._tracker.mark_clean()

    def force_dirty(self) -> None:
        self._tracker.force_dirty()

    # ─── Issues & Kennzahlen ───

    @property
    def issue_cards(self) -> list[IssueCard]:
        document = self._host.get_document()
        if document is None:
            return []
        results = self._host.get_validation_results()
        return build_issue_cards(
            document.roster, results.roster, results.per_assignment,
            self._config.issues,
        )

    @property
    def issue_summary(self) -> list[IssueSummaryItem]:
        return build_issue_summary(self.issue_cards, self.incomplete_class_wide_assignments)

    @property
    def incomplete_class_wide_assignments(self) -> list[AssignmentCoverageSummary]:
        """Class-wide Aufgaben mit nicht zugeordneten aktiven Studierenden."""
        document = self._host.get_document()
        if document is None or document.roster is None:
            return []
        return get_incomplete_class_wide_assignments(document.roster)

    @property
    def roster_insights(self) -> Optional[RosterInsights]:
        document = self._host.get_document()
        if document is None or document.roster is None:
            return None
        return build_roster_insights(document.roster)

    def get_assignment_coverage_summary(
        self, assignment_id: str
    ) -> Optional[AssignmentCoverageSummary]:
        """Abdeckung einer Aufgabe; None bei fehlendem Roster oder unbekannter Aufgabe."""
        document = self._host.get_document()
        if document is None or document.roster is None:
            return None
        roster = document.roster
        assignment = roster.find_assignment(assignment_id)
        if assignment is None:
            return None
        group_set = roster.find_group_set(assignment.group_set_id)
        groups = resolve_group_set_groups(roster, group_set) if group_set else []
        return get_assignment_coverage_summary(assignment, roster.students, groups)
