"""Pet grooming price estimates."""

__version__ = "0.1.0"
