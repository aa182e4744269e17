from unittest.mock import AsyncMock

import pytest

from models.payment import CheckStatusResponseDTO
from session_fakes import FakeOrderListener, RecordingSink


@pytest.fixture
def listener():
    return FakeOrderListener()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def gateway():
    """Gateway that keeps answering "pending" unless a test says otherwise."""
    client = AsyncMock()
    client.check_status.return_value = CheckStatusResponseDTO(status="pending")
    return client
