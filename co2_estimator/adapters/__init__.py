"""Adapters layer - Concrete implementations of ports.

Each adapter implements one or more ports from the ports layer:
- routes: Static route catalog and its CSV loader
- rendering: HTML result rendering
"""
