from __future__ import annotations

import json
from datetime import date
from pathlib import Path

from barbershop.application.exceptions import CorruptStateError
from barbershop.application.utils.dates import Clock
from barbershop.infrastructure.store.memory_store import MemoryLedgerStore
from barbershop.infrastructure.store.snapshot import (
    LedgerSnapshot,
    deserialize_snapshot,
    serialize_snapshot,
)


class JsonLedgerStore(MemoryLedgerStore):
    """Ledger persisted as a single JSON document, rewritten atomically on every mutation."""

    def __init__(
        self,
        path: str | Path = "./data/ledger.json",
        seed: bool = True,
        clock: Clock = date.today,
        reseed_on_corrupt: bool = False,
    ) -> None:
        super().__init__(seed=seed, clock=clock)
        self._path = Path(path)
        self._reseed_on_corrupt = reseed_on_corrupt

    @property
    def path(self) -> Path:
        return self._path

    def _load_initial(self) -> LedgerSnapshot:
        if self._path.exists():
            try:
                return deserialize_snapshot(self._path.read_bytes())
            except CorruptStateError:
                if not self._reseed_on_corrupt:
                    raise
                aside = self._path.with_suffix(self._path.suffix + ".corrupt")
                self._path.replace(aside)
                self._logger.warning(
                    "Corrupt ledger moved aside, reseeding",
                    extra={"path": str(aside)},
                )

        snapshot = super()._load_initial()
        self._persist(snapshot)
        return snapshot

    def _persist(self, snapshot: LedgerSnapshot) -> None:
        """Write to a temp file then rename over the ledger."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(serialize_snapshot(snapshot), f, indent=2, ensure_ascii=False)
            temp_path.replace(self._path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink()
            raise
