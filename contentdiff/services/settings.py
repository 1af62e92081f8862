"""
Application settings management.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Optional

from contentdiff.core.detect.classifier import (
    DEFAULT_CONTROL_RATIO_THRESHOLD,
    DEFAULT_SNIFF_BYTES,
    ClassifierOptions,
    normalize_extension,
)


@dataclass
class ClassifierSettings:
    """Settings for text/binary classification."""
    sniff_bytes: int = DEFAULT_SNIFF_BYTES
    control_ratio_threshold: float = DEFAULT_CONTROL_RATIO_THRESHOLD
    extra_text_extensions: list[str] = field(default_factory=list)

    def to_options(self) -> ClassifierOptions:
        """Build classifier options from these settings."""
        return ClassifierOptions(
            sniff_bytes=self.sniff_bytes,
            control_ratio_threshold=self.control_ratio_threshold,
            extra_text_extensions=frozenset(
                normalize_extension(ext) for ext in self.extra_text_extensions
            ),
        )


@dataclass
class DecoderSettings:
    """Settings for decoding text content."""
    default_encoding: str = "utf-8"
    detection_confidence: float = 0.7


@dataclass
class ComparisonSettings:
    """Settings for file comparison."""
    max_file_size: Optional[int] = None  # Bytes; no limit if None
    show_unchanged: bool = True


@dataclass
class ApplicationSettings:
    """Main application settings container."""
    classifier: ClassifierSettings = field(default_factory=ClassifierSettings)
    decoder: DecoderSettings = field(default_factory=DecoderSettings)
    comparison: ComparisonSettings = field(default_factory=ComparisonSettings)


class SettingsManager:
    """Manager for loading/saving application settings."""

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = Path(settings_path) if settings_path else self._get_default_path()
        self._settings: Optional[ApplicationSettings] = None

    @staticmethod
    def _get_default_path() -> Path:
        """Get the default settings file path."""
        if os.name == 'nt':
            # Windows
            app_data = os.environ.get('APPDATA', os.path.expanduser('~'))
            return Path(app_data) / 'ContentDiff' / 'settings.json'
        else:
            # Linux/Mac
            config_home = os.environ.get('XDG_CONFIG_HOME',
                                         os.path.expanduser('~/.config'))
            return Path(config_home) / 'contentdiff' / 'settings.json'

    @property
    def settings(self) -> ApplicationSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> ApplicationSettings:
        """Load settings from disk, falling back to defaults."""
        if not self.settings_path.exists():
            return ApplicationSettings()

        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return self._from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logging.warning(f"SettingsManager - Could not load {self.settings_path}: {e}")
            return ApplicationSettings()

    def save(self, settings: Optional[ApplicationSettings] = None) -> bool:
        """Save settings to disk."""
        settings = settings or self._settings
        if settings is None:
            return False

        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(asdict(settings), f, indent=2)

            self._settings = settings
            return True

        except OSError as e:
            logging.error(f"SettingsManager - Could not save {self.settings_path}: {e}")
            return False

    def reset(self) -> ApplicationSettings:
        """Reset to default settings."""
        self._settings = ApplicationSettings()
        self.save()
        return self._settings

    def _from_dict(self, data: dict[str, Any]) -> ApplicationSettings:
        """Convert dictionary back to settings objects."""
        classifier_data = data.get('classifier', {})
        classifier = ClassifierSettings(
            sniff_bytes=int(classifier_data.get('sniff_bytes', DEFAULT_SNIFF_BYTES)),
            control_ratio_threshold=float(classifier_data.get(
                'control_ratio_threshold', DEFAULT_CONTROL_RATIO_THRESHOLD)),
            extra_text_extensions=list(classifier_data.get('extra_text_extensions', [])),
        )

        decoder_data = data.get('decoder', {})
        decoder = DecoderSettings(
            default_encoding=decoder_data.get('default_encoding', 'utf-8'),
            detection_confidence=float(decoder_data.get('detection_confidence', 0.7)),
        )

        comparison_data = data.get('comparison', {})
        comparison = ComparisonSettings(
            max_file_size=comparison_data.get('max_file_size'),
            show_unchanged=comparison_data.get('show_unchanged', True),
        )

        return ApplicationSettings(
            classifier=classifier,
            decoder=decoder,
            comparison=comparison,
        )
