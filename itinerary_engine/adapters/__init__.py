"""Adapters layer - Concrete implementations of ports.

This module contains in-process implementations of the port
interfaces:
- Segment storage (in-memory)
- Geocoding (lookup table)
"""
