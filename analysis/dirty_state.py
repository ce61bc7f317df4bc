"""Erkennung ungespeicherter Änderungen über einen Inhalts-Hash (Baseline).

Die Baseline merkt sich den Hash des zuletzt gespeicherten Zustands und das
Profil, zu dem sie gehört. Während eines Profilwechsels passt die Baseline
nicht zum aktiven Profil; das Dokument gilt dann als unverändert, bis die
Anwendung explizit ``mark_clean()`` oder ``force_dirty()`` aufruft.

Zustände::

    Clean ──(Änderung)──► Dirty ──(mark_clean)──► Clean
    Clean/Dirty ──(Profilwechsel)──► Mismatched (liest sich als Clean)
    Mismatched ──(mark_clean / initialize)──► Clean
    Mismatched ──(force_dirty)──► Dirty
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from analysis.snapshot import hash_snapshot
from config.schema import TrackerConfig

logger = logging.getLogger(__name__)

# Liegt außerhalb des Hash-Bereichs [0, 2**32) und ist nie ein echter Hash.
DIRTY_SENTINEL = -1


@dataclass(frozen=True)
class DirtyBaseline:
    """Fingerabdruck des zuletzt gespeicherten Zustands."""

    content_hash: int
    owner_profile_id: Optional[str]

    @property
    def is_forced(self) -> bool:
        return self.content_hash == DIRTY_SENTINEL


class BaselineTracker:
    """Vergleicht den aktuellen speicherbaren Zustand mit der Baseline.

    ``get_saveable_state`` liefert bei jedem Aufruf den aktuellen Zustand
    (z.B. ``lambda: saveable_state(store.document)``).
    """

    def __init__(
        self,
        get_saveable_state: Callable[[], Any],
        config: Optional[TrackerConfig] = None,
    ) -> None:
        self._get_saveable_state = get_saveable_state
        self._config = config or TrackerConfig()
        self._current_profile_id: Optional[str] = None
        self._baseline = DirtyBaseline(
            content_hash=self._current_hash(),
            owner_profile_id=None,
        )

    @property
    def baseline(self) -> DirtyBaseline:
        return self._baseline

    @property
    def current_profile_id(self) -> Optional[str]:
        """Zuletzt beobachtetes aktives Profil."""
        return self._current_profile_id

    def _current_hash(self) -> int:
        return hash_snapshot(self._get_saveable_state())

    # ─── Operationen ───

    def initialize(self, profile_id: Optional[str]) -> None:
        """Baseline für ein frisch geladenes Profil setzen."""
        self._current_profile_id = profile_id
        self._baseline = DirtyBaseline(self._current_hash(), profile_id)
        logger.debug(
            f"Baseline initialisiert für Profil {profile_id!r} "
            f"(Hash {self._baseline.content_hash:#010x})"
        )

    def observe_profile(self, active_profile_id: Optional[str]) -> None:
        """Profilwechsel registrieren; die Baseline wird vom Profil gelöst."""
        if active_profile_id == self._current_profile_id:
            return
        previous = self._current_profile_id
        self._current_profile_id = active_profile_id
        self._baseline = DirtyBaseline(self._baseline.content_hash, None)
        if self._config.log_switches:
            logger.info(
                f"Profilwechsel {previous!r} → {active_profile_id!r}: "
                f"Baseline wartet auf mark_clean/force_dirty"
            )

    def evaluate(self, active_profile_id: Optional[str]) -> bool:
        """True wenn ungespeicherte Änderungen für das aktive Profil vorliegen."""
        self.observe_profile(active_profile_id)
        if self._baseline.owner_profile_id != active_profile_id:
            return False
        return self._current_hash() != self._baseline.content_hash

    def mark_clean(self) -> None:
        """Aktuellen Zustand als gespeichert übernehmen.

        Gebunden wird an das zuletzt beobachtete Profil, nicht an das Profil
        des Aufrufers: ein Speichern, das erst nach Beginn eines Wechsels
        fertig wird, darf keine fremde Baseline hinterlassen.
        """
        self._baseline = DirtyBaseline(self._current_hash(), self._current_profile_id)
        logger.debug(f"mark_clean: Profil {self._current_profile_id!r}")

    def force_dirty(self) -> None:
        """Ungespeicherte Änderungen erzwingen (z.B. nach einem Import)."""
        self._baseline = DirtyBaseline(DIRTY_SENTINEL, self._current_profile_id)
        logger.debug(f"force_dirty: Profil {self._current_profile_id!r}")
