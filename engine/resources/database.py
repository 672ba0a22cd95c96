"""
Asset Database.

Loads and validates the static data the dialogue layer looks up by name:
characters and sound effects.

Layout under the data path:
    schemas/character.schema.json
    schemas/sound.schema.json
    database/characters/*.json   one character object or a list of them
    database/sounds/*.json       {"id": "default-speech", "file": "sfx/speech.ogg"}
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import jsonschema
from pydantic import ValidationError

from story.character import Character, character_name_to_filename

DEFAULT_PLAYER_ID = "player"


class AssetDatabase:
    """
    Central storage for characters and sounds.

    Also serves as the CharacterSource used to resolve participant names.
    """

    def __init__(self, data_path: Path | str, player_id: str = DEFAULT_PLAYER_ID):
        self._data_path = Path(data_path)
        self._schemas: dict[str, Any] = {}
        self.player_id = player_id

        self.characters: dict[str, Character] = {}
        self.sounds: dict[str, str] = {}

        self.logger = logging.getLogger(__name__)

    def load_all(self) -> None:
        """Load all data from disk."""
        self._load_schemas()

        for char_id, data in self._load_category("characters", "character.schema.json").items():
            fields = {k: v for k, v in data.items() if k != "id"}
            try:
                self.characters[char_id] = Character(**fields)
            except ValidationError as e:
                self.logger.error(f"Invalid character {char_id}: {e}")

        for sound_id, data in self._load_category("sounds", "sound.schema.json").items():
            self.sounds[sound_id] = data["file"]

        self.logger.info(
            f"Loaded {len(self.characters)} characters, "
            f"{len(self.sounds)} sounds."
        )
        if self.player is None:
            self.logger.warning(f"No player character '{self.player_id}' found")

    def _load_schemas(self) -> None:
        schema_dir = self._data_path / "schemas"
        if not schema_dir.exists():
            self.logger.warning(f"Schema directory not found: {schema_dir}")
            return

        for schema_file in schema_dir.glob("*.schema.json"):
            try:
                with open(schema_file, 'r', encoding='utf-8') as f:
                    self._schemas[schema_file.name] = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error(f"Failed to load schema {schema_file}: {e}")

    def _load_category(self, folder: str, schema_name: str) -> dict[str, Any]:
        """Load and validate every JSON file in a category folder."""
        category_dir = self._data_path / "database" / folder
        data_store: dict[str, Any] = {}

        if not category_dir.exists():
            self.logger.warning(f"Data directory not found: {category_dir}")
            return data_store

        schema = self._schemas.get(schema_name)
        if not schema:
            self.logger.warning(f"No schema found for {folder} ({schema_name})")
            return data_store

        for file_path in sorted(category_dir.glob("*.json")):
            try:
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                self.logger.error(f"Failed to load {file_path}: {e}")
                continue

            for entry in data if isinstance(data, list) else [data]:
                try:
                    jsonschema.validate(instance=entry, schema=schema)
                except jsonschema.ValidationError as e:
                    self.logger.error(f"Validation error in {file_path}: {e.message}")
                    continue
                if isinstance(entry, dict) and 'id' in entry:
                    data_store[entry['id']] = entry

        return data_store

    # Registration

    def add_character(self, char_id: str, character: Character) -> Character:
        self.characters[char_id] = character
        return character

    def add_sound(self, sound_id: str, file_path: str) -> None:
        self.sounds[sound_id] = file_path

    # Lookup

    @property
    def player(self) -> Optional[Character]:
        return self.characters.get(self.player_id)

    def get_character(self, char_id: str) -> Optional[Character]:
        return self.characters.get(char_id)

    def find_character(self, name: str) -> Optional[Character]:
        """
        Resolve a character by name as written in dialogue scripts.

        Tries the asset id ("ann-smith"), then full name, first name and
        nickname, case-insensitively.
        """
        character = self.characters.get(character_name_to_filename(name))
        if character is not None:
            return character

        wanted = name.strip().lower()
        if not wanted:
            return None
        for candidate in self.characters.values():
            names = (candidate.fullname, candidate.firstname, candidate.nickname)
            if wanted in (n.lower() for n in names if n):
                return candidate
        return None

    def get_sound(self, sound_id: str) -> Optional[str]:
        """Sound file path for a sound id, relative paths resolved against the data path."""
        file_path = self.sounds.get(sound_id)
        if file_path is None:
            return None
        path = Path(file_path)
        if not path.is_absolute():
            path = self._data_path / path
        return str(path)
