"""Extraction schema package — typed models for extraction input and output.

- models.py: Core dataclasses (SlideRecord, ExtractionSettings, TargetKind)
- loader.py: YAML settings serialization and result rendering
"""

from .loader import dump_records, load_settings, save_settings
from .models import ExtractionSettings, SlideRecord, TargetKind

__all__ = [
    # Models
    "ExtractionSettings",
    "SlideRecord",
    "TargetKind",
    # Loader
    "dump_records",
    "load_settings",
    "save_settings",
]
