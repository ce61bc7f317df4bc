"""Roster-Prüfung — Diagnose-CLI über gespeicherte Profil-Dokumente.

Verwendung:
  python main.py issues <profil.json>                 Issue-Karten anzeigen
  python main.py issues <profil.json> -v <val.json>   inkl. Validierungsergebnissen
  python main.py insights <profil.json>               Roster-Kennzahlen
  python main.py coverage <profil.json> <aufgabe>     Abdeckung einer Aufgabe
  python main.py status <arbeitskopie.json> <gespeichert.json>
                                                      Ungespeicherte Änderungen?
  python main.py hash <datei.json>                    Inhalts-Hash ausgeben
  python main.py config show                          Konfiguration anzeigen
  python main.py config init                          Default-Konfiguration anlegen
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

console = Console()


def _load_document_or_abort(path: Path):
    """Lädt ein Profil-Dokument oder bricht mit Fehlermeldung ab."""
    from models.profile import ProfileDocument
    try:
        return ProfileDocument.load_json(path)
    except ValueError as e:
        console.print(f"[red]Profil-Dokument ungültig: {path}[/red]\n{e}")
        sys.exit(1)


def _load_validation_or_abort(path: Optional[Path]):
    from models.validation import ValidationResults
    if path is None:
        return ValidationResults()
    try:
        return ValidationResults.model_validate_json(path.read_text(encoding="utf-8"))
    except ValueError as e:
        console.print(f"[red]Validierungsergebnis ungültig: {path}[/red]\n{e}")
        sys.exit(1)


def _load_config(config_path: Optional[Path]):
    from config.manager import ConfigManager
    mgr = ConfigManager()
    try:
        return mgr.load_or_default(config_path)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)


# ─── ISSUES ───────────────────────────────────────────────────────────────────

@click.command("issues")
@click.argument("profil", type=click.Path(exists=True, path_type=Path))
@click.option("--validation", "-v", "validation_path", default=None,
              type=click.Path(exists=True, path_type=Path),
              help="JSON-Datei mit Validierungsergebnissen.")
@click.option("--config", "config_path", default=None,
              type=click.Path(path_type=Path),
              help="YAML-Konfiguration (Default: config/roster_check.yaml).")
@click.option("--json", "as_json", is_flag=True, default=False,
              help="Karten als JSON ausgeben.")
def cmd_issues(profil: Path, validation_path: Optional[Path],
               config_path: Optional[Path], as_json: bool):
    """Zeigt die sortierten Issue-Karten eines Profils an."""
    from analysis.issues import IssueReport, build_issue_cards, build_issue_summary
    from analysis.roster_metrics import (
        build_roster_insights, get_incomplete_class_wide_assignments,
    )

    document = _load_document_or_abort(profil)
    results = _load_validation_or_abort(validation_path)
    config = _load_config(config_path)

    cards = build_issue_cards(
        document.roster, results.roster, results.per_assignment, config.issues,
    )
    if as_json:
        click.echo(json.dumps(
            [c.model_dump(mode="json", exclude_none=True) for c in cards],
            indent=2, ensure_ascii=False,
        ))
        return

    console.print(f"\n{document.summary()}\n")
    roster = document.roster
    incomplete = get_incomplete_class_wide_assignments(roster) if roster else []
    report = IssueReport(
        cards=cards,
        insights=build_roster_insights(roster) if roster else None,
        summary=build_issue_summary(cards, incomplete),
        incomplete_assignments=incomplete,
    )
    report.print_rich()


# ─── INSIGHTS ─────────────────────────────────────────────────────────────────

@click.command("insights")
@click.argument("profil", type=click.Path(exists=True, path_type=Path))
def cmd_insights(profil: Path):
    """Zeigt Status- und Vollständigkeitszahlen der Studierenden."""
    from analysis.roster_metrics import build_roster_insights

    document = _load_document_or_abort(profil)
    if document.roster is None:
        console.print("[yellow]Kein Roster im Profil.[/yellow]")
        return

    ins = build_roster_insights(document.roster)
    table = Table(title="Roster-Kennzahlen", box=box.ROUNDED)
    table.add_column("Kennzahl")
    table.add_column("Wert", justify="right")
    table.add_row("Aktiv", str(ins.active_count))
    table.add_row("Abgemeldet", str(ins.dropped_count))
    table.add_row("Unvollständig", str(ins.incomplete_count))
    table.add_row("Ohne E-Mail", str(ins.missing_email_count))
    table.add_row("Ohne Git-Benutzername", str(ins.missing_git_username_count))
    console.print(table)


# ─── COVERAGE ─────────────────────────────────────────────────────────────────

@click.command("coverage")
@click.argument("profil", type=click.Path(exists=True, path_type=Path))
@click.argument("assignment_id")
def cmd_coverage(profil: Path, assignment_id: str):
    """Prüft, ob alle aktiven Studierenden einer Aufgabe zugeordnet sind."""
    from analysis.overview import ProfileOverview, ProfileStore

    document = _load_document_or_abort(profil)
    store = ProfileStore()
    store.load_profile(profil.stem, document)
    overview = ProfileOverview(store)

    summary = overview.get_assignment_coverage_summary(assignment_id)
    if summary is None:
        console.print(f"[red]Aufgabe nicht gefunden: {assignment_id}[/red]")
        sys.exit(1)

    from analysis.group_resolver import unresolved_total

    roster = document.roster
    group_set = roster.find_group_set(roster.find_assignment(assignment_id).group_set_id)
    color = "green" if summary.is_complete else "yellow"
    lines = [
        f"Aktive Studierende: [bold]{summary.active_count}[/bold] | "
        f"zugeordnet: [{color}]{summary.assigned_active_count}[/{color}]",
    ]
    if group_set is None:
        lines.append("[red]Gruppen-Set gelöscht[/red]")
    else:
        suffix = "" if group_set.is_editable else " (read-only)"
        lines.append(f"Gruppen-Set: {group_set.name}{suffix}")
        unresolved = unresolved_total(group_set)
        if unresolved:
            lines.append(f"[yellow]Nicht aufgelöste LMS-Mitglieder: {unresolved}[/yellow]")
    console.print(Panel(
        "\n".join(lines),
        title=f"Abdeckung {assignment_id}",
        border_style="cyan",
    ))
    for student in summary.unassigned_active_students:
        console.print(f"  [yellow]• {student.name}[/yellow] ({student.id})")


# ─── STATUS ───────────────────────────────────────────────────────────────────

@click.command("status")
@click.argument("arbeitskopie", type=click.Path(exists=True, path_type=Path))
@click.argument("gespeichert", type=click.Path(exists=True, path_type=Path))
def cmd_status(arbeitskopie: Path, gespeichert: Path):
    """Vergleicht eine Arbeitskopie mit dem gespeicherten Stand (Exit 1 = ungespeichert)."""
    from analysis.dirty_state import BaselineTracker
    from models.profile import saveable_state

    saved = _load_document_or_abort(gespeichert)
    working = _load_document_or_abort(arbeitskopie)

    current = {"document": saved}
    tracker = BaselineTracker(lambda: saveable_state(current["document"]))
    tracker.initialize(gespeichert.stem)
    current["document"] = working

    if tracker.evaluate(gespeichert.stem):
        console.print("[bold yellow]● Ungespeicherte Änderungen[/bold yellow]")
        sys.exit(1)
    console.print("[bold green]✓ Keine ungespeicherten Änderungen[/bold green]")


# ─── HASH ─────────────────────────────────────────────────────────────────────

@click.command("hash")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.option("--raw", is_flag=True, default=False,
              help="Gesamte JSON-Datei hashen statt des speicherbaren Ausschnitts.")
def cmd_hash(datei: Path, raw: bool):
    """Gibt den Inhalts-Hash einer JSON-Datei aus."""
    from analysis.snapshot import hash_snapshot
    from models.profile import saveable_state

    if raw:
        value = json.loads(datei.read_text(encoding="utf-8"))
    else:
        value = saveable_state(_load_document_or_abort(datei))
    click.echo(f"{hash_snapshot(value):#010x}")


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anzeigen oder anlegen."""


@cmd_config.command("show")
@click.option("--config", "config_path", default=None, type=click.Path(path_type=Path))
def config_show(config_path: Optional[Path]):
    """Zeigt die aktuelle Konfiguration an."""
    config = _load_config(config_path)
    ic = config.issues
    table = Table(title="Issue-Karten", box=box.ROUNDED)
    table.add_column("Quelle")
    table.add_column("Problemarten")
    table.add_row("Roster", "\n".join(k.value for k in ic.roster_issue_kinds))
    table.add_row("Aufgabe", "\n".join(k.value for k in ic.assignment_issue_kinds))
    console.print(table)
    console.print(
        f"[bold]Detail-Vorschau:[/bold] {ic.detail_preview_limit} Einträge | "
        f"[bold]Profilwechsel loggen:[/bold] {'ja' if config.tracker.log_switches else 'nein'}"
    )


@cmd_config.command("init")
@click.option("--config", "config_path", default=None, type=click.Path(path_type=Path))
def config_init(config_path: Optional[Path]):
    """Legt eine Default-Konfiguration an."""
    from config.defaults import default_roster_check_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    target = config_path or mgr.DEFAULT_CONFIG
    if target.exists() and not click.confirm(
        f"{target} existiert bereits. Überschreiben?", default=False
    ):
        return
    mgr.save(default_roster_check_config(), target)


# ─── CLI-Gruppe ───────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", is_flag=True, default=False, help="Debug-Logging aktivieren.")
def cli(verbose: bool):
    """Roster-Prüfung: ungespeicherte Änderungen und Datenqualität von Profilen."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main():
    """Einstiegspunkt."""
    cli()


# Befehle registrieren
cli.add_command(cmd_issues)
cli.add_command(cmd_insights)
cli.add_command(cmd_coverage)
cli.add_command(cmd_status)
cli.add_command(cmd_hash)
cli.add_command(cmd_config)


if __name__ == "__main__":
    main()
