"""JSON snapshot repository.

Persists the whole booking state (five collections plus the id counter)
as one JSON document. Writes go to a temporary file in the same directory
which then replaces the snapshot, so a crash mid-write never leaves a
truncated file behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ...domain.errors import StorageError
from ...services.state import BookingState


@dataclass
class JsonSnapshotRepository:
    """Snapshot repository backed by a JSON file.

    This adapter implements SnapshotRepositoryPort.

    Attributes:
        path: Location of the snapshot file
    """

    path: Path

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self._logger = logging.getLogger(__name__)

    def load(self) -> Optional[BookingState]:
        """Load the state from the snapshot file.

        Returns:
            The restored state, or None if the file does not exist.

        Raises:
            StorageError: If the file cannot be read or parsed.
        """
        if not self.path.exists():
            self._logger.info("No snapshot found", extra={"path": str(self.path)})
            return None

        try:
            with self.path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(
                f"Failed to read snapshot: {e}",
                file_path=str(self.path),
                cause=e,
            )

        if not isinstance(data, dict):
            raise StorageError(
                "Snapshot root must be a JSON object", file_path=str(self.path)
            )

        try:
            state = BookingState.from_dict(data)
        except StorageError as e:
            e.file_path = str(self.path)
            raise

        self._logger.info(
            "Snapshot loaded",
            extra={"path": str(self.path), "id_counter": state.ids.current, **state.counts()},
        )
        return state

    def save(self, state: BookingState) -> None:
        """Write the state to the snapshot file.

        Raises:
            StorageError: If the file cannot be written.
        """
        data = state.to_dict()
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, sort_keys=True)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(
                f"Failed to write snapshot: {e}",
                file_path=str(self.path),
                cause=e,
            )

        self._logger.debug(
            "Snapshot saved",
            extra={"path": str(self.path), "id_counter": data["id_counter"]},
        )
