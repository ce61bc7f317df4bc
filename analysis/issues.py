"""Issue-Karten: zusammengeführte, sortierte Datenqualitäts-Probleme eines Rosters.

Quellen (in dieser Reihenfolge erzeugt):
1. Roster-weite Validierungsprobleme (externe Validierung)
2. Aufgaben-bezogene Validierungsprobleme (externe Validierung)
3. Querverweise der Gruppen-Sets: unbekannte Mitglieder, leere Gruppen

Sortiert wird stabil nach ``count`` absteigend – bei Gleichstand bleibt die
Erzeugungsreihenfolge erhalten.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Literal, Mapping, Optional

from pydantic import BaseModel

from analysis.group_resolver import resolve_group_set_groups
from analysis.roster_metrics import AssignmentCoverageSummary, RosterInsights, build_member_map
from config.defaults import (
    ISSUE_SUMMARY_KEYS, MEMBER_ID_ISSUE_KINDS, validation_kind_label,
)
from config.schema import IssueConfig
from models.assignment import Assignment
from models.member import RosterMember
from models.roster import Roster
from models.validation import ValidationIssue, ValidationKind, ValidationResult

logger = logging.getLogger(__name__)

IssueCardKind = Literal[
    "unknown_students",
    "empty_groups",
    "roster_validation",
    "assignment_validation",
]


# ─── Modelle ──────────────────────────────────────────────────────────────────

class IssueCard(BaseModel):
    """Anzeigefertige Zusammenfassung einer Problemklasse. Wird nie gespeichert."""

    id: str
    kind: IssueCardKind
    assignment_id: Optional[str] = None
    group_set_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    count: int
    details: Optional[list[str]] = None
    issue_kind: Optional[ValidationKind] = None


class IssueSummaryItem(BaseModel):
    """Ein Eintrag der kompakten Problem-Übersicht ("3 unknown")."""

    key: str
    label: str
    count: int


class IssueReport(BaseModel):
    """Issue-Karten plus Roster-Kennzahlen für die Ausgabe."""

    cards: list[IssueCard]
    insights: Optional[RosterInsights] = None
    summary: list[IssueSummaryItem] = []
    incomplete_assignments: list[AssignmentCoverageSummary] = []

    @property
    def total_count(self) -> int:
        return sum(c.count for c in self.cards)

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()

        if self.insights is not None:
            ins = self.insights
            console.print(Panel(
                f"Aktiv: [bold]{ins.active_count}[/bold] | "
                f"Abgemeldet: {ins.dropped_count} | "
                f"Unvollständig: {ins.incomplete_count}\n"
                f"Ohne E-Mail: {ins.missing_email_count} | "
                f"Ohne Git-Benutzername: {ins.missing_git_username_count}",
                title="Roster",
                border_style="cyan",
            ))

        for coverage in self.incomplete_assignments:
            console.print(
                f"[yellow]⚠ {coverage.assignment_id}: "
                f"{len(coverage.unassigned_active_students)} von {coverage.active_count} "
                f"aktiven Studierenden ohne Gruppe[/yellow]"
            )

        if not self.cards and not self.incomplete_assignments:
            console.print("[bold green]✓ Keine Probleme gefunden.[/bold green]")
            return

        if self.summary:
            console.print(
                "  ".join(f"[bold]{s.count}[/bold] {s.label}" for s in self.summary)
            )
        if not self.cards:
            return

        table = Table(title="Probleme", box=box.ROUNDED, show_lines=True)
        table.add_column("Anzahl", justify="right", width=7)
        table.add_column("Problem", width=30)
        table.add_column("Kontext", width=28)
        table.add_column("Details")

        for card in self.cards:
            color = "red" if card.kind in ("unknown_students", "roster_validation") else "yellow"
            table.add_row(
                f"[{color}]{card.count}[/{color}]",
                card.title,
                card.description or "",
                "\n".join(card.details or []),
            )
        console.print(table)


# ─── Formatierung ─────────────────────────────────────────────────────────────

def format_details_list(items: list[str], limit: int = 3) -> str:
    """Vorschau einer Liste: ``"a; b; c + 2 more"`` bei mehr als ``limit`` Einträgen."""
    preview = items[:limit]
    remainder = len(items) - limit
    text = "; ".join(preview)
    if remainder > 0:
        text += f" + {remainder} more"
    return text


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'' if count == 1 else 's'}"


def _unique(ids: list[str]) -> list[str]:
    """Doppelte IDs entfernen, Reihenfolge beibehalten."""
    return list(dict.fromkeys(ids))


# ─── Einzelne Karten ──────────────────────────────────────────────────────────

def _roster_issue_card(
    issue: ValidationIssue,
    member_map: Mapping[str, RosterMember],
    limit: int,
) -> IssueCard:
    affected = _unique(issue.affected_ids)
    count = len(affected)

    # Bei Mitglieder-Problemen Namen statt IDs anzeigen
    if issue.kind in MEMBER_ID_ISSUE_KINDS:
        display_items = [
            member_map[i].name if i in member_map else i for i in affected
        ]
    else:
        display_items = affected

    return IssueCard(
        id=f"roster-{issue.kind.value}",
        kind="roster_validation",
        title=f"{count} {validation_kind_label(issue.kind)}",
        count=count,
        issue_kind=issue.kind,
        details=[format_details_list(display_items, limit)] if display_items else None,
    )


def _assignment_issue_card(
    assignment: Assignment,
    issue: ValidationIssue,
    description: str,
    limit: int,
) -> IssueCard:
    affected = _unique(issue.affected_ids)
    count = len(affected)
    return IssueCard(
        id=f"assignment-{assignment.id}-{issue.kind.value}",
        kind="assignment_validation",
        assignment_id=assignment.id,
        group_set_id=assignment.group_set_id,
        title=f"{count} {validation_kind_label(issue.kind)}",
        description=description,
        count=count,
        issue_kind=issue.kind,
        details=[format_details_list(affected, limit)] if affected else None,
    )


# ─── Aggregation ──────────────────────────────────────────────────────────────

def build_issue_cards(
    roster: Optional[Roster],
    roster_validation: Optional[ValidationResult],
    assignment_validations: Mapping[str, ValidationResult],
    config: Optional[IssueConfig] = None,
) -> list[IssueCard]:
    """Führt alle Problemquellen zu einer sortierten Liste von Issue-Karten zusammen.

    Args:
        roster: Aktuelles Roster oder None (→ leere Liste).
        roster_validation: Roster-weites Validierungsergebnis (optional).
        assignment_validations: Aufgaben-ID → Validierungsergebnis. Einträge
            zu gelöschten Aufgaben werden übersprungen.
        config: Filter und Vorschau-Länge; Default wenn None.

    Returns:
        Karten nach ``count`` absteigend; Gleichstand in Erzeugungsreihenfolge.
    """
    if roster is None:
        return []

    cfg = config or IssueConfig()
    limit = cfg.detail_preview_limit
    roster_kinds = set(cfg.roster_issue_kinds)
    assignment_kinds = set(cfg.assignment_issue_kinds)

    member_map = build_member_map(roster.members)
    cards: list[IssueCard] = []

    # ── 1. Roster-Probleme ───────────────────────────────────────────────────
    issues = roster_validation.issues if roster_validation is not None else []
    for issue in issues:
        if issue.kind not in roster_kinds:
            continue
        cards.append(_roster_issue_card(issue, member_map, limit))

    # ── 2. Aufgaben-Probleme ─────────────────────────────────────────────────
    group_set_by_id = {gs.id: gs for gs in roster.group_sets}
    assignment_by_id = {a.id: a for a in roster.assignments}

    for assignment_id, validation in assignment_validations.items():
        assignment = assignment_by_id.get(assignment_id)
        if assignment is None:
            logger.debug(f"Validierung für unbekannte Aufgabe {assignment_id!r} übersprungen")
            continue
        group_set = group_set_by_id.get(assignment.group_set_id)
        description = (
            f"{assignment.name} · {group_set.name}" if group_set is not None
            else assignment.name
        )
        for issue in validation.issues:
            if issue.kind not in assignment_kinds:
                continue
            cards.append(_assignment_issue_card(assignment, issue, description, limit))

    # ── 3. Gruppen-Set-Querverweise ──────────────────────────────────────────
    for group_set in roster.group_sets:
        if group_set.is_system:
            continue

        unknown_groups: list[tuple[str, list[str]]] = []
        empty_groups: list[str] = []

        for group in resolve_group_set_groups(roster, group_set):
            unknown_ids = [m for m in group.member_ids if m not in member_map]
            if unknown_ids:
                unknown_groups.append((group.name, unknown_ids))
            if not group.member_ids:
                empty_groups.append(group.name)

        unique_unknown = _unique([i for _, ids in unknown_groups for i in ids])
        if unique_unknown:
            cards.append(IssueCard(
                id=f"unknown-{group_set.id}",
                kind="unknown_students",
                group_set_id=group_set.id,
                title=_plural(len(unique_unknown), "unknown student"),
                description=group_set.name,
                count=len(unique_unknown),
                details=[
                    f"{name}: {format_details_list(ids, limit)}"
                    for name, ids in unknown_groups
                ],
            ))

        if empty_groups:
            cards.append(IssueCard(
                id=f"empty-{group_set.id}",
                kind="empty_groups",
                group_set_id=group_set.id,
                title=_plural(len(empty_groups), "empty group"),
                description=group_set.name,
                count=len(empty_groups),
                details=[format_details_list(empty_groups, limit)],
            ))

    # sorted() ist stabil → Gleichstand bleibt in Erzeugungsreihenfolge
    ranked = sorted(cards, key=lambda c: -c.count)
    logger.debug(f"Issue-Aggregation: {len(ranked)} Karten")
    return ranked


def build_issue_summary(
    cards: list[IssueCard],
    incomplete_assignments: Optional[list[AssignmentCoverageSummary]] = None,
) -> list[IssueSummaryItem]:
    """Kompakte Übersicht: Summen pro Problemgruppe, feste Prioritätsreihenfolge.

    ``incomplete_assignments`` (siehe ``get_incomplete_class_wide_assignments``)
    liefert den Eintrag ``unassigned``: Summe der nicht zugeordneten aktiven
    Studierenden über alle class-wide Aufgaben. Einträge mit Summe 0 entfallen.
    """
    key_by_source: dict[str, str] = {}
    for key, (_, sources) in ISSUE_SUMMARY_KEYS.items():
        for source in sources:
            key_by_source[source] = key

    totals: dict[str, int] = defaultdict(int)
    for card in cards:
        source = card.issue_kind.value if card.issue_kind is not None else card.kind
        key = key_by_source.get(source)
        if key is not None:
            totals[key] += card.count

    for coverage in incomplete_assignments or []:
        totals["unassigned"] += len(coverage.unassigned_active_students)

    return [
        IssueSummaryItem(key=key, label=label, count=totals[key])
        for key, (label, _) in ISSUE_SUMMARY_KEYS.items()
        if totals.get(key, 0) > 0
    ]
