"""
Translation lookup for user-facing text.
"""

import json
import logging
import os
from enum import Enum
from typing import Dict


logger = logging.getLogger(__name__)

DEFAULT_LANG_FILE = "lang.json"


class LangEntry(Enum):
    """Named UI strings with their default text."""
    GUI_TITLE = "Student Administration System"
    MENU_HEADER = "STUDENT ADMINISTRATION"
    APP_STARTED = "Application started"
    DATA_SAVED = "Data saved to database"
    DATA_LOADED = "Data loaded from database"
    UNSAVED_CHANGES = "There are unsaved changes. Exit anyway? (y/n): "
    GOODBYE = "Goodbye!"
    
    @property
    def default_value(self) -> str:
        return self.value


class LangSource:
    """Loads translations from a JSON file, falling back to default values."""
    
    def __init__(self, path: str = DEFAULT_LANG_FILE):
        self._path = path
        self._translations: Dict[str, str] = {}
        self._load_translations()
    
    @property
    def path(self) -> str:
        return self._path
    
    def get_translation(self, entry: LangEntry) -> str:
        """Get the translated text for an entry or its default value."""
        translation = self._translations.get(entry.name)
        return translation if translation is not None else entry.default_value
    
    def _load_translations(self) -> None:
        if not os.path.exists(self._path):
            logger.info("Translation file %s not found, creating default", self._path)
            self._create_default_language_file()
            return
        
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read translation file %s: %s", self._path, e)
            self._translations = {}
            return
        
        if not isinstance(data, dict):
            logger.warning("Translation file %s does not contain an object", self._path)
            self._translations = {}
            return
        
        self._translations = {str(k): str(v) for k, v in data.items()}
    
    def _create_default_language_file(self) -> None:
        defaults = {entry.name: entry.default_value for entry in LangEntry}
        
        try:
            with open(self._path, "w", encoding="utf-8") as f:
                json.dump(defaults, f, indent=2, ensure_ascii=False)
            self._translations = defaults
        except OSError as e:
            logger.warning("Could not create default language file: %s", e)
            self._translations = {}
