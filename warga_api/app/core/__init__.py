"""Configuration, logging, errors, database and security primitives."""
