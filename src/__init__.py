"""Scout9 backend: esports scouting report API.

This package provides a hexagonal architecture around the ``scouting`` core:

Layers:
- application: Use cases and port interfaces
- infrastructure: Adapters for GRID, the baseline analyzers and report storage
- api: REST and WebSocket endpoints
"""

__version__ = "1.0.0"
