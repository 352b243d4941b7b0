"""Settings loader — YAML serialization for ExtractionSettings and results.

Settings live in a small human-editable YAML file so an extraction profile
can be reviewed and version-controlled alongside the decks it is run on.
"""

import json
from pathlib import Path

import yaml

from .models import ExtractionSettings, SlideRecord


def save_settings(settings: ExtractionSettings, path: str | Path) -> None:
    """Serialize ExtractionSettings to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.to_dict()
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False,
                  allow_unicode=True, width=120)


def load_settings(path: str | Path) -> ExtractionSettings:
    """Deserialize ExtractionSettings from a YAML file.

    An empty file yields the defaults. A document that is not a mapping
    raises ValueError.
    """
    path = Path(path)
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Settings file {path} must contain a mapping")
    return ExtractionSettings.from_dict(data)


def dump_records(records: list[SlideRecord], fmt: str = "json") -> str:
    """Render slide records as the ``[{slide, texts}]`` collection."""
    data = [r.to_dict() for r in records]
    if fmt == "json":
        return json.dumps(data, ensure_ascii=False, indent=2)
    if fmt == "yaml":
        return yaml.dump(data, default_flow_style=False, sort_keys=False,
                         allow_unicode=True, width=120)
    raise ValueError(f"Unknown output format: {fmt!r}. Use 'json' or 'yaml'.")
