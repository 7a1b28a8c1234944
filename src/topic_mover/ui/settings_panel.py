"""Terminal settings panel."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt, Confirm

from ..settings_store import SettingsStore

EXAMPLES = [
    (
        "Example 1: Simple organization",
        "---\ntopic: soccer\n---\n\nFile will be moved to: soccer/",
    ),
    (
        "Example 2: With base folder",
        'Base Folder: "Notes"\nProperty: "category"\n\n---\ncategory: work\n---\n\n'
        "File will be moved to: Notes/work/",
    ),
    (
        "Example 3: With subfolders",
        'Property: "topic"\nSubfolder Property: "subtopic"\n\n---\ntopic: sports\n'
        "subtopic: soccer\n---\n\nFile will be moved to: sports/soccer/",
    ),
]


class SettingsPanel:
    """Interactive editor for the settings record.

    Every answer is saved as soon as it is given.
    """

    def __init__(self, store: SettingsStore, console: Optional[Console] = None):
        self.store = store
        self.console = console or Console()

    def _set(self, name: str, value) -> None:
        self.store.current.update(name, value)
        self.store.save()

    def _toggle(self, name: str, label: str, description: str) -> bool:
        self.console.print(f"[dim]{description}[/dim]")
        value = Confirm.ask(label, default=getattr(self.store.current, name), console=self.console)
        self._set(name, value)
        return value

    def _text(self, name: str, label: str, description: str) -> str:
        self.console.print(f"[dim]{description}[/dim]")
        value = Prompt.ask(label, default=getattr(self.store.current, name), console=self.console)
        value = value.strip()
        self._set(name, value)
        return value

    def display(self) -> None:
        """Walk through every control, then show the examples."""
        self.console.print("\n[bold cyan]Topic Mover Settings[/bold cyan]")
        self.console.print(
            "Automatically organize your notes by moving them to folders "
            "based on frontmatter properties.\n"
        )

        self._toggle("enabled", "Enable plugin", "Turn the automatic file moving on or off")
        self._text(
            "property_name", "Property name",
            'The frontmatter property to use for folder organization (e.g., "topic", "tag", "category")'
        )
        self._text(
            "base_folder", "Base folder",
            'Optional base folder path. Leave empty to use vault root. Example: "Organized"'
        )
        use_subfolders = self._toggle(
            "use_subfolders", "Use subfolders",
            "Create nested subfolders based on an additional property (e.g., topic/subtopic)"
        )
        if use_subfolders:
            self._text(
                "subfolder_property", "Subfolder property",
                'The frontmatter property to use for subfolder creation (e.g., "subtopic", "category")'
            )
        self._toggle(
            "normalize_folder_names", "Normalize folder names",
            "Convert folder names to lowercase and remove special characters for better compatibility"
        )
        self._toggle(
            "create_folders", "Auto-create folders",
            "Automatically create folders if they do not exist"
        )

        self.show_examples()

    def show_examples(self) -> None:
        """Print worked examples of how notes are filed."""
        self.console.print("\n[bold]Examples[/bold]")
        for title, body in EXAMPLES:
            self.console.print(Panel(body, title=title, expand=False))
