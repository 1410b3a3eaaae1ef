"""Configuration dataclasses and YAML loading for report generation."""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional
import yaml
from reportlab.lib.pagesizes import A4


@dataclass
class ReportConfig:
    """Page geometry and presentation settings for the report paginator."""

    # A4 in points: 595.28 x 841.89
    page_width: float = A4[0]
    page_height: float = A4[1]
    margin: float = 40.0

    header_row_height: float = 16.0
    row_height: float = 16.0
    footer_offset: float = 30.0

    # Remaining space below which a non-empty section starts on a new page
    section_break_threshold: float = 60.0
    section_gap: float = 14.0
    column_gap: float = 20.0

    summary_box_height: float = 46.0
    summary_box_gap: float = 10.0

    organization: str = "HR TRAVEL ADMINISTRATION"
    subtitle: str = "EMPLOYEE TRAVEL REPORT"
    author: str = "HR Travel Administration"
    style: str = "classic"

    out_dir: Path = field(default_factory=lambda: Path("reports"))

    @classmethod
    def from_yaml(cls, path: Path) -> "ReportConfig":
        """Load configuration from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        known = {spec.name for spec in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

        if "out_dir" in data:
            data["out_dir"] = Path(data["out_dir"])

        return cls(**data)

    def to_yaml(self, path: Path) -> None:
        """Save configuration to a YAML file."""
        data = {}
        for spec in fields(self):
            value = getattr(self, spec.name)
            data[spec.name] = str(value) if isinstance(value, Path) else value
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def load_config(path: Optional[Path] = None) -> ReportConfig:
    """Load config from path or return default config."""
    if path is None:
        return ReportConfig()
    return ReportConfig.from_yaml(path)
