import uuid

import pytest


@pytest.fixture
def pkg():
    """A package name no other test has used; the registry is never cleared."""

    return f"t{uuid.uuid4().hex[:12]}"
