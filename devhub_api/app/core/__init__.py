"""Configuration, logging, storage and caching primitives."""
