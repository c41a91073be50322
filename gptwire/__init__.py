"""Request and response models, validation and wire encoding for OpenAI-compatible HTTP APIs."""

__version__ = "0.1.0"