"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems like:
- Record sources (HTTP API, JSON files, in-memory fixtures)
- Output formats (JSON)
"""
