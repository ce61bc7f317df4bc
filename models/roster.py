"""Roster: Mitglieder, Aufgaben und Gruppen-Sets eines Kurses (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, Field

from models.assignment import Assignment
from models.group_set import GroupSet
from models.member import RosterMember


class Roster(BaseModel):
    """Kurs-Mitgliedschaft plus Arbeitsdaten; gehört exklusiv zum ProfileDocument."""

    students: list[RosterMember] = Field(default_factory=list)
    staff: list[RosterMember] = Field(default_factory=list)
    assignments: list[Assignment] = Field(default_factory=list)
    group_sets: list[GroupSet] = Field(default_factory=list)

    @property
    def members(self) -> list[RosterMember]:
        """Studierende und Lehrpersonal in Roster-Reihenfolge."""
        return [*self.students, *self.staff]

    def find_group_set(self, group_set_id: str) -> Optional[GroupSet]:
        return next((gs for gs in self.group_sets if gs.id == group_set_id), None)

    def find_assignment(self, assignment_id: str) -> Optional[Assignment]:
        return next((a for a in self.assignments if a.id == assignment_id), None)
