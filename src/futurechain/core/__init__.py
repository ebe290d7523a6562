"""Core types, configuration and error hierarchy."""
