"""Test utilities for zing applications.

    from zing.testing import TestClient
"""

from zing.testing.client import TestClient

__all__ = ["TestClient"]
