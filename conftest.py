"""
Root conftest.py for the order service repository.

Puts the service directory on sys.path so that ``import app`` resolves
without an editable install.
"""

import sys
from pathlib import Path


def pytest_configure(config):
    """Add the order service directory to sys.path."""
    service_dir = Path(__file__).parent / "services" / "order-service"
    if str(service_dir) not in sys.path:
        sys.path.insert(0, str(service_dir))
