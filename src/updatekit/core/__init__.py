"""Core configuration, constants and errors for UpdateKit."""
