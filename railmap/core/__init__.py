"""Configuration, logging setup and CLI helpers."""
