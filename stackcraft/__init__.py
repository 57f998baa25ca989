"""stackcraft -- interactive full-stack project generator."""

__version__ = "0.1.0"
