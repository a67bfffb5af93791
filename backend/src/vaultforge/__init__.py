"""VaultForge - versioned object lifecycle engine for a password store."""

__version__ = "0.1.0"
