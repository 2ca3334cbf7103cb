"""Landing-page lead form handler: phone mask, validation and webhook submission."""

__version__ = "1.0.0"
