"""Test utilities for waypoint routers.

    from waypoint.testing import TestClient
"""

from waypoint.testing.client import TestClient

__all__ = ["TestClient"]
