"""BDD tests for series derivation features."""

import pytest
from pytest_bdd import scenarios

scenarios("derivation.feature")

pytestmark = [pytest.mark.tier(1)]
