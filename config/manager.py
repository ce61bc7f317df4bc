"""Konfigurationsmanager: Laden, Speichern und Validieren der Roster-Prüfung.

Nutzt ruamel.yaml für YAML-Serialisierung mit Kommentaren.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.schema import RosterCheckConfig

logger = logging.getLogger(__name__)

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── YAML-KOMMENTAR-AUFBAU ───

_YAML_HEADER = f"""\
# ============================================
# Roster-Prüfung — Konfiguration
# Erstellt: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "issues": (
        "Issue-Karten",
        "Welche Validierungsprobleme als Karte erscheinen und wie viele\n"
        "Einträge die Detail-Vorschau zeigt.",
    ),
    "tracker": (
        "Ungespeicherte Änderungen",
        None,
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "roster_check.yaml"

    def first_run_check(self) -> bool:
        """Gibt True zurück wenn noch keine Config existiert (Erstaufruf)."""
        return not self.DEFAULT_CONFIG.exists()

    # ─── Laden ───

    def load(self, path: Optional[Path] = None) -> RosterCheckConfig:
        """Lade Config aus YAML. Validiert automatisch via Pydantic."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            raise FileNotFoundError(
                f"Konfigurationsdatei nicht gefunden: {target}\n"
                f"Führen Sie 'python main.py config init' aus."
            )
        with open(target, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            config = RosterCheckConfig.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Konfigurationsdatei ungültig: {target}\n"
                f"Pydantic-Fehler: {e}"
            ) from e
        logger.info(f"Konfiguration geladen: {target}")
        return config

    def load_or_default(self, path: Optional[Path] = None) -> RosterCheckConfig:
        """Wie load(), aber Default-Config wenn keine Datei existiert."""
        target = path or self.DEFAULT_CONFIG
        if not target.exists():
            logger.info(f"Keine Konfiguration unter {target} – verwende Defaults")
            return RosterCheckConfig()
        return self.load(target)

    # ─── Speichern ───

    def save(self, config: RosterCheckConfig, path: Optional[Path] = None) -> None:
        """Speichere Config als YAML mit Kommentaren."""
        target = path or self.DEFAULT_CONFIG
        target.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(target, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Konfiguration gespeichert: {target}")

    def _build_commented_yaml(self, config: RosterCheckConfig) -> CommentedMap:
        """Baut die YAML-Struktur mit Kommentaren auf."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        if "issues" in cm:
            issues_map = CommentedMap(cm["issues"])
            issues_map.yaml_add_eol_comment("1–20", "detail_preview_limit")
            cm["issues"] = issues_map

        return cm
