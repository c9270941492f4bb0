import jax.numpy as jnp
import pytest

from sofajax.config import set_dtype


@pytest.fixture(autouse=True)
def _ensure_float64():
    """Set float64 precision before every test.

    With pytest-xdist, each worker process starts from the import-time
    default.  This fixture makes sure every test runs in float64 unless it
    explicitly overrides it (e.g. test_config.py lowers the dtype).
    """
    set_dtype(jnp.float64)
