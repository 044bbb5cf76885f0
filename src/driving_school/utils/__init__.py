"""Configuration, logging, files and dependency wiring."""
