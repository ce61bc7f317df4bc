"""ProfileDocument: editierbare Einheit eines Profils + speicherbarer Ausschnitt."""

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.roster import Roster


class CourseInfo(BaseModel):
    """Kurs-Identität; nach dem Anlegen des Profils unveränderlich."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class OperationConfigs(BaseModel):
    """Einstellungen für Repository-Operationen."""

    target_org: str = ""
    repo_name_template: str = "{assignment}-{group}"
    create_template_org: str = ""
    clone_target_dir: str = ""
    clone_directory_layout: str = "flat"     # flat / by-team / by-task


class ExportSettings(BaseModel):
    """Einstellungen für den Roster-Export."""

    output_folder: str = ""
    output_csv: bool = False
    output_xlsx: bool = False
    output_yaml: bool = True
    csv_file: str = "student-info.csv"
    xlsx_file: str = "student-info.xlsx"
    yaml_file: str = "students.yaml"
    member_option: str = "(email, gitid)"
    include_group: bool = True
    include_member: bool = True
    include_initials: bool = False
    full_groups: bool = True


class ProfileSettings(BaseModel):
    """Profil-Einstellungen (Kurs, Git-Verbindung, Operationen, Export)."""

    course: CourseInfo
    git_connection: Optional[str] = None      # Name einer gespeicherten Git-Verbindung
    course_verified_at: Optional[str] = None  # ISO-Zeitstempel der letzten Kursprüfung
    operations: OperationConfigs = Field(default_factory=OperationConfigs)
    exports: ExportSettings = Field(default_factory=ExportSettings)


class ProfileDocument(BaseModel):
    """Vollständiges In-Memory-Dokument eines Profils.

    Wird beim Laden eines Profils erzeugt und beim Profilwechsel komplett
    ersetzt. ``roster`` ist None solange kein Roster importiert wurde.
    """

    settings: ProfileSettings
    roster: Optional[Roster] = None

    def summary(self) -> str:
        """Kurze Übersicht über das Dokument."""
        course = self.settings.course
        lines = [f"Kurs: {course.name} ({course.id})"]
        if self.roster is None:
            lines.append("Kein Roster geladen.")
        else:
            r = self.roster
            lines += [
                f"Studierende: {len(r.students)} | Lehrpersonal: {len(r.staff)}",
                f"Aufgaben: {len(r.assignments)} | Gruppen-Sets: {len(r.group_sets)}",
            ]
        return "\n".join(lines)

    # ─── Persistenz ────────────────────────────────────────────────────────

    def save_json(self, path: Path) -> None:
        """Speichert das Dokument als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "ProfileDocument":
        """Lädt ein Dokument aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())


def saveable_state(document: Optional[ProfileDocument]) -> Optional[dict[str, Any]]:
    """Projektion des Dokuments auf die Felder, die ungespeicherte Änderungen ausmachen.

    Nicht enthalten: Kurs-Identität (unveränderlich) und App-Einstellungen
    (werden separat automatisch gespeichert).
    """
    if document is None:
        return None
    settings = document.settings
    return {
        "git_connection": settings.git_connection,
        "course_verified_at": settings.course_verified_at,
        "operations": settings.operations.model_dump(mode="json"),
        "exports": settings.exports.model_dump(mode="json"),
        "roster": (
            document.roster.model_dump(mode="json")
            if document.roster is not None else None
        ),
    }
