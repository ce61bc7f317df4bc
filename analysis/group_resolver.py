"""Konkrete Mitgliederlisten für die Gruppen eines Gruppen-Sets."""

from __future__ import annotations

from typing import Optional

from models.group_set import Group, GroupSet, GroupSetKind
from models.roster import Roster


def resolve_group_set_groups(roster: Optional[Roster], group_set: GroupSet) -> list[Group]:
    """Gibt die Gruppen eines Sets mit Roster-lokalen ``member_ids`` zurück.

    - linked: ``resolved_member_ids`` (Auflösung der LMS-IDs passiert beim
      Import); ``unresolved_count`` bleibt für die Anzeige erhalten.
    - copied / unlinked / system: ``member_ids`` verweisen bereits auf das Roster.

    Die Eingaben werden nicht verändert; jede Gruppe ist eine neue Kopie.
    ``roster`` wird aktuell nicht ausgewertet und darf None sein.
    """
    resolved: list[Group] = []
    for group in group_set.groups:
        if group_set.kind == GroupSetKind.LINKED:
            member_ids = list(group.resolved_member_ids)
        else:
            member_ids = list(group.member_ids)
        resolved.append(group.model_copy(update={
            "member_ids": member_ids,
            "lms_member_ids": list(group.lms_member_ids),
            "resolved_member_ids": list(group.resolved_member_ids),
        }))
    return resolved


def unresolved_total(group_set: GroupSet) -> int:
    """Summe der nicht auflösbaren LMS-Mitglieder eines linked Sets."""
    if group_set.kind != GroupSetKind.LINKED:
        return 0
    return sum(g.unresolved_count for g in group_set.groups)
