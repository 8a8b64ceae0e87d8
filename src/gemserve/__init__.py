"""gemserve - Gemini document server content resolution."""

__version__ = "0.1.0"
