from __future__ import annotations

from typing import Any

import pytest

from dewey.config import ClientConfig


@pytest.fixture()
def client() -> ClientConfig:
    return ClientConfig(base_url="http://localhost:7700", api_key="secret")


@pytest.fixture()
def task_payload() -> dict[str, Any]:
    return {
        "taskUid": 7,
        "indexUid": "movies",
        "status": "enqueued",
        "type": "indexCreation",
        "enqueuedAt": "2024-05-01T10:20:30.123456789Z",
    }
