"""Core configuration, logging, metrics and lifecycle."""
