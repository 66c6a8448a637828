"""
Dialog database.

Loads characters and scripts from a data directory:

```
data/
    characters/*.json    key -> character record
    script/*.json        {"labels": {label: [statement, ...]}, "sequence": [...]}
    script/*.script      text scripts (see parley.script.loader)
```

JSON files are validated against the bundled schemas. Files that fail
to load or validate are logged and skipped.

Statements outside any label (a JSON "sequence" or the lines before the
first header of a text script) form the unnamed sequence. When several
files carry one, the last file by name wins.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import jsonschema

from parley.resources.schemas import CHARACTERS_FILE_SCHEMA, SCRIPT_FILE_SCHEMA
from parley.script.loader import ScriptFileParser

if TYPE_CHECKING:
    from parley.script.session import DialogSession


class ScriptDatabase:
    """
    Characters, labels and the unnamed sequence read from disk, ready to
    install on a session.
    """

    def __init__(self, data_path: Path | str):
        self._data_path = Path(data_path)

        self.characters: dict[str, dict[str, Any]] = {}
        self.labels: dict[str, list[Any]] = {}
        self.sequence: list[Any] = []

        self.logger = logging.getLogger(__name__)

    def load_all(self) -> None:
        """Load all data from disk. Later files override earlier ones (by name order)."""
        self.characters = self._load_characters()
        self.labels, self.sequence = self._load_scripts()

        self.logger.info(
            f"Loaded {len(self.characters)} characters, "
            f"{len(self.labels)} labels, "
            f"{len(self.sequence)} unnamed statements."
        )

    def install(self, session: DialogSession, auto_advance: bool = False) -> None:
        """
        Register the loaded characters and labels on a session.

        A non-empty unnamed sequence is loaded as the current sequence.

        Args:
            session: Session to fill
            auto_advance: Display the first unnamed statement right away
        """
        session.register_characters(self.characters)
        session.define_labels(self.labels)
        if self.sequence:
            session.load_sequence(self.sequence, auto_advance=auto_advance)

    def get_character(self, key: str) -> Optional[dict[str, Any]]:
        return self.characters.get(key)

    def get_label(self, label: str) -> Optional[list[Any]]:
        return self.labels.get(label)

    def _category_dir(self, folder: str) -> Optional[Path]:
        category_dir = self._data_path / folder
        if not category_dir.exists():
            self.logger.warning(f"Data directory not found: {category_dir}")
            return None
        return category_dir

    def _load_json(self, file_path: Path, schema: dict[str, Any]) -> Optional[Any]:
        """Read and validate one JSON file; None if it is unusable."""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(f"Failed to load {file_path}: {e}")
            return None

        try:
            jsonschema.validate(instance=data, schema=schema)
        except jsonschema.ValidationError as e:
            self.logger.error(f"Validation error in {file_path}: {e.message}")
            return None

        return data

    def _load_characters(self) -> dict[str, dict[str, Any]]:
        store: dict[str, dict[str, Any]] = {}
        category_dir = self._category_dir("characters")
        if category_dir is None:
            return store

        for file_path in sorted(category_dir.glob("*.json")):
            data = self._load_json(file_path, CHARACTERS_FILE_SCHEMA)
            if data is not None:
                store.update(data)

        return store

    def _load_scripts(self) -> tuple[dict[str, list[Any]], list[Any]]:
        labels: dict[str, list[Any]] = {}
        sequence: list[Any] = []
        category_dir = self._category_dir("script")
        if category_dir is None:
            return labels, sequence

        parser = ScriptFileParser()
        for file_path in sorted(category_dir.iterdir()):
            if file_path.suffix == ".json":
                data = self._load_json(file_path, SCRIPT_FILE_SCHEMA)
                if data is None:
                    continue
                file_labels = data["labels"]
                file_sequence = data.get("sequence", [])
            elif file_path.suffix == ".script":
                try:
                    script = parser.parse_file(file_path)
                except (OSError, UnicodeDecodeError) as e:
                    self.logger.error(f"Failed to load {file_path}: {e}")
                    continue
                file_labels = script.labels
                file_sequence = script.sequence
            else:
                continue

            labels.update(file_labels)
            if file_sequence:
                if sequence:
                    self.logger.debug(f"Unnamed sequence replaced by {file_path.name}")
                sequence = list(file_sequence)

        return labels, sequence
