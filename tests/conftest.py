"""Shared fixtures for the test suite."""

import pytest

from tests.builders import make_transaction


@pytest.fixture
def txn():
    return make_transaction
