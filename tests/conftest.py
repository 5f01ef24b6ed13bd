from __future__ import annotations

import sys
from typing import Iterator

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _reset_loguru() -> Iterator[None]:
    """Keep `cli.main()` from leaving a sink bound to a closed capture stream."""
    yield
    logger.remove()
    logger.add(lambda message: sys.stderr.write(message), level="WARNING")
