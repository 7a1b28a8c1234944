"""Settings model for topic mover."""

from pathlib import Path
from typing import Dict, Any, Optional
import json
from dataclasses import dataclass, fields, asdict

from ..exceptions import ConfigurationError


@dataclass
class Settings:
    """User-configurable options controlling how notes are filed."""
    enabled: bool = True
    property_name: str = "topic"
    base_folder: str = ""
    use_subfolders: bool = False
    subfolder_property: str = "subtopic"
    normalize_folder_names: bool = True
    create_folders: bool = True

    @classmethod
    def default(cls) -> "Settings":
        """Create settings with every option at its default."""
        return cls()

    def update(self, name: str, value: Any) -> None:
        """Set a single option, checking its type against the default."""
        field_name = canonical_setting_name(name)
        if field_name is None:
            raise ConfigurationError(f"Unknown setting: {name}")
        setattr(self, field_name, _check_type(field_name, value))


# Names used by the plugin's data.json
_CAMEL_CASE_KEYS = {
    "enabled": "enabled",
    "propertyName": "property_name",
    "baseFolder": "base_folder",
    "useSubfolders": "use_subfolders",
    "subfolderProperty": "subfolder_property",
    "normalizeFolderNames": "normalize_folder_names",
    "createFolders": "create_folders",
}

_FIELD_TO_CAMEL = {v: k for k, v in _CAMEL_CASE_KEYS.items()}


def canonical_setting_name(name: str) -> Optional[str]:
    """Map a snake_case, camelCase or dashed key to its field name."""
    if name in _CAMEL_CASE_KEYS:
        return _CAMEL_CASE_KEYS[name]
    snake = name.replace("-", "_")
    if snake in _FIELD_TO_CAMEL:
        return snake
    return None


def _check_type(field_name: str, value: Any) -> Any:
    expected = type(getattr(Settings, field_name))
    if not isinstance(value, expected):
        raise ConfigurationError(
            f"Setting '{field_name}' must be {expected.__name__}, got {type(value).__name__}"
        )
    return value


def settings_from_dict(data: Dict[str, Any]) -> Settings:
    """Build settings from persisted data, backfilling missing keys from defaults."""
    if not isinstance(data, dict):
        raise ConfigurationError("Settings data must be a JSON object")

    settings = Settings.default()
    for key, value in data.items():
        field_name = canonical_setting_name(key)
        if field_name is None:
            # Unknown keys from other versions are ignored
            continue
        setattr(settings, field_name, _check_type(field_name, value))

    return settings


def settings_to_dict(settings: Settings) -> Dict[str, Any]:
    """Convert settings to the persisted camelCase form."""
    return {_FIELD_TO_CAMEL[key]: value for key, value in asdict(settings).items()}


def setting_names() -> list:
    """Get the field names of all settings, in declaration order."""
    return [f.name for f in fields(Settings)]


def load_settings(settings_path: Path) -> Settings:
    """Load settings from a JSON file."""
    try:
        with open(settings_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid settings file {settings_path}: {e}")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read settings file {settings_path}: {e}")

    return settings_from_dict(data)


def save_settings(settings: Settings, settings_path: Path) -> None:
    """Save settings to a JSON file."""
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    with open(settings_path, 'w', encoding='utf-8') as f:
        json.dump(settings_to_dict(settings), f, indent=2)
