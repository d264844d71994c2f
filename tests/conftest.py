import os
import sys
from pathlib import Path

import pytest

# The API modules are imported top-level (`from core import db`), as when the
# app is run from inside `api/`. Put `api/` on sys.path before collection.
ROOT_DIR = Path(__file__).resolve().parent.parent
api_dir = ROOT_DIR / "api"

if str(api_dir) not in sys.path:
    sys.path.insert(0, str(api_dir))


def pytest_collection_modifyitems(config, items):
    """Skipping integration tests unless RUN_INTEGRATION_TESTS=1."""
    run_integration = os.getenv("RUN_INTEGRATION_TESTS", "0") == "1"

    skip_integration = pytest.mark.skip(
        reason="Skipping integration tests (set RUN_INTEGRATION_TESTS=1 to run)"
    )
    for item in items:
        is_integration_path = f"{os.sep}tests{os.sep}integration{os.sep}" in str(item.fspath)
        if (is_integration_path or item.get_closest_marker("integration")) and not run_integration:
            item.add_marker(skip_integration)
