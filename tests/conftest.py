# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures.

Every test gets an isolated registry; the default registry is reset after
each test so registrations never leak between tests.
"""

import pytest

from rulechain import Validator, reset_default_registry
from rulechain.testing import make_registry


@pytest.fixture(autouse=True)
def _fresh_default_registry():
    reset_default_registry()
    yield
    reset_default_registry()


@pytest.fixture
def registry():
    """Isolated registry with built-in rules."""
    return make_registry()


@pytest.fixture
def validator(registry):
    """Validator bound to the isolated registry."""
    return Validator(registry=registry)
