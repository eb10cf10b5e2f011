# tests/conftest.py
import pytest
from tantalum.units.catalog import DEFAULT_CATALOG as _catalog



@pytest.fixture(scope="session")
def catalog():
    return _catalog

@pytest.fixture(scope="session")
def u():
    return _catalog.as_namespace()
