"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, no
string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path

from roost.layouts import COMPONENT_LAYOUT, DEFAULT_LAYOUT


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, toggles_file="toggles.json")
    """

    debug: bool = False

    # Templates
    template_dir: str | Path = "templates"
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Layout shells
    default_layout: str = DEFAULT_LAYOUT
    component_layout: str = COMPONENT_LAYOUT

    # Feature toggles — available toggles plus an optional overrides file
    toggles_file: str | Path | None = None
    toggle_overrides_file: str | Path | None = None

    # Static assets (page bundles are served from here)
    assets_url: str = "/assets"
