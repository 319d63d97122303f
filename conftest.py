# =============================================================================
# CONFTEST - Global pytest setup
# =============================================================================
# Makes the top-level modules (server, config, app_state) importable and
# keeps tests away from any real database
# =============================================================================

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent))


@pytest.fixture(autouse=True)
def setup_test_env():
    """Force the no-database mode for every test."""
    env_vars = {
        "MONGODB_URI": "",
        "MONGODB_URI_db1": "",
        "JWT_SECRET": "test-secret-0123456789abcdef0123456789",
        "RATE_LIMIT_ENABLED": "false",
    }
    with patch.dict(os.environ, env_vars):
        yield
