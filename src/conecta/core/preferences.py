# preferences.py
# User-facing accessibility switches. One instance is created at startup and
# handed by reference to every component that reads it.

import logging
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)


@dataclass
class AccessibilityPreferences:
    high_contrast: bool = True
    voice_guidance: bool = True
    large_controls: bool = True

    @classmethod
    def names(cls):
        return [f.name for f in fields(cls)]

    def set(self, name: str, value: bool) -> None:
        """Change one switch by field name; unknown names raise ValueError."""
        if name not in self.names():
            raise ValueError(f"Unknown preference: {name!r}")
        setattr(self, name, bool(value))
        logger.info(f"Preference {name} = {bool(value)}")

    def toggle(self, name: str) -> bool:
        if name not in self.names():
            raise ValueError(f"Unknown preference: {name!r}")
        self.set(name, not getattr(self, name))
        return getattr(self, name)
