"""Kennzahlen über Roster-Mitglieder und Aufgaben-Abdeckung."""

from typing import Iterable, Optional

from pydantic import BaseModel

from analysis.group_resolver import resolve_group_set_groups
from models.group_set import Group
from models.member import MemberStatus, RosterMember
from models.assignment import Assignment, AssignmentType
from models.roster import Roster


# ─── Metriken-Modelle ─────────────────────────────────────────────────────────

class RosterInsights(BaseModel):
    """Zählwerte über alle Studierenden eines Rosters."""

    active_count: int
    dropped_count: int
    incomplete_count: int
    missing_email_count: int
    missing_git_username_count: int


class AssignmentCoverageSummary(BaseModel):
    """Wie viele aktive Studierende eine Aufgabe über ihre Gruppen erreicht."""

    assignment_id: str
    active_count: int
    assigned_active_count: int
    unassigned_active_students: list[RosterMember]

    @property
    def is_complete(self) -> bool:
        return not self.unassigned_active_students


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def is_active_student(student: RosterMember) -> bool:
    return student.is_active


def get_active_students(students: Iterable[RosterMember]) -> list[RosterMember]:
    return [s for s in students if is_active_student(s)]


def build_member_map(members: Iterable[RosterMember]) -> dict[str, RosterMember]:
    """ID → Mitglied. Bei doppelten IDs gewinnt der letzte Eintrag."""
    return {m.id: m for m in members}


def _is_blank(value: Optional[str]) -> bool:
    return not (value or "").strip()


# ─── Kennzahlen ───────────────────────────────────────────────────────────────

def build_roster_insights(roster: Roster) -> RosterInsights:
    """Status- und Vollständigkeitszahlen über ``roster.students``."""
    students = roster.students
    return RosterInsights(
        active_count=len(get_active_students(students)),
        dropped_count=sum(1 for s in students if s.status == MemberStatus.DROPPED),
        incomplete_count=sum(1 for s in students if s.status == MemberStatus.INCOMPLETE),
        missing_email_count=sum(1 for s in students if _is_blank(s.email)),
        missing_git_username_count=sum(1 for s in students if _is_blank(s.git_username)),
    )


def get_assignment_coverage_summary(
    assignment: Assignment,
    students: list[RosterMember],
    groups: list[Group],
) -> AssignmentCoverageSummary:
    """Abdeckung der aktiven Studierenden durch die Gruppen einer Aufgabe.

    Args:
        assignment: Die Aufgabe (nur die ID wird übernommen).
        students: Studierende des Rosters.
        groups: Aufgelöste Gruppen des referenzierten Gruppen-Sets
            (siehe ``resolve_group_set_groups``).

    Returns:
        Summary mit allen nicht zugeordneten aktiven Studierenden in
        Roster-Reihenfolge (vollständige Datensätze).
    """
    active_students = get_active_students(students)
    active_map = build_member_map(active_students)
    assigned_active_ids: set[str] = set()

    for group in groups:
        for member_id in group.member_ids:
            if member_id in active_map:
                assigned_active_ids.add(member_id)

    unassigned = [s for s in active_students if s.id not in assigned_active_ids]

    return AssignmentCoverageSummary(
        assignment_id=assignment.id,
        active_count=len(active_students),
        assigned_active_count=len(assigned_active_ids),
        unassigned_active_students=unassigned,
    )


def get_incomplete_class_wide_assignments(roster: Roster) -> list[AssignmentCoverageSummary]:
    """Abdeckung aller class-wide Aufgaben, die nicht alle aktiven Studierenden erreichen.

    Aufgaben mit gelöschtem Gruppen-Set gelten als gar nicht abgedeckt.
    Reihenfolge wie ``roster.assignments``.
    """
    incomplete: list[AssignmentCoverageSummary] = []
    for assignment in roster.assignments:
        if assignment.assignment_type != AssignmentType.CLASS_WIDE:
            continue
        group_set = roster.find_group_set(assignment.group_set_id)
        groups = resolve_group_set_groups(roster, group_set) if group_set else []
        summary = get_assignment_coverage_summary(assignment, roster.students, groups)
        if not summary.is_complete:
            incomplete.append(summary)
    return incomplete
