"""Configuration loading for the GEO mapping tool."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class LayoutConfig(BaseModel):
    canvas_width: int = 1000
    canvas_height: int = 600
    # x of the prompt, content and citation columns as a fraction of width
    column_fractions: tuple[float, float, float] = (0.15, 0.5, 0.85)


class RenderConfig(BaseModel):
    label_max_chars: int = 20
    prompt_size_divisor: float = 5.0
    content_size: float = 15.0
    citation_size: float = 12.0
    background: str = "#0F172A"


class Config(BaseModel):
    db_path: str = "data/geomap.db"
    output_dir: str = "output"
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)

    @property
    def resolved_db_path(self) -> Path:
        """Resolve db_path relative to project root."""
        p = Path(self.db_path)
        if p.is_absolute():
            return p
        return _project_root() / p

    @property
    def resolved_output_dir(self) -> Path:
        p = Path(self.output_dir).expanduser()
        if p.is_absolute():
            return p
        return _project_root() / p


def _project_root() -> Path:
    """Return the geomap project root directory."""
    return Path(__file__).parent.parent


def load_config(config_path: Path | None = None) -> Config:
    """Load config from YAML file. Falls back to defaults if file missing."""
    if config_path is None:
        config_path = _project_root() / "config.yaml"

    if config_path.exists():
        raw: dict[str, Any] = yaml.safe_load(config_path.read_text()) or {}
        return Config(**raw)

    return Config()
