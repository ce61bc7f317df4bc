"""Analyse-Modul: Dirty-State (Hash-Baseline), Issue-Karten und Roster-Kennzahlen."""

from .snapshot import hash_snapshot
from .dirty_state import BaselineTracker, DirtyBaseline, DIRTY_SENTINEL
from .group_resolver import resolve_group_set_groups
from .roster_metrics import (
    AssignmentCoverageSummary, RosterInsights, build_roster_insights,
    get_assignment_coverage_summary, get_incomplete_class_wide_assignments,
)
from .issues import IssueCard, IssueSummaryItem, build_issue_cards, build_issue_summary
from .overview import ProfileOverview, ProfileStore

__all__ = [
    "hash_snapshot",
    "BaselineTracker",
    "DirtyBaseline",
    "DIRTY_SENTINEL",
    "resolve_group_set_groups",
    "AssignmentCoverageSummary",
    "RosterInsights",
    "build_roster_insights",
    "get_assignment_coverage_summary",
    "get_incomplete_class_wide_assignments",
    "IssueCard",
    "IssueSummaryItem",
    "build_issue_cards",
    "build_issue_summary",
    "ProfileOverview",
    "ProfileStore",
]
