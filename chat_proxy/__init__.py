"""OpenRouter chat proxy for Roblox game clients."""

__version__ = "1.0.0"
