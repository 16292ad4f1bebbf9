"""Configuration, logging, persistence helpers and error types."""
