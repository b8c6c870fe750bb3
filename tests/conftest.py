from collections.abc import Generator

import pytest
from sqlalchemy.engine import Engine

from tests.utils.db import create_items_engine


@pytest.fixture()
def items_engine() -> Generator[Engine, None, None]:
    """25 rows: ids 1..25."""
    engine = create_items_engine(25)
    yield engine
    engine.dispose()


@pytest.fixture()
def empty_engine() -> Generator[Engine, None, None]:
    engine = create_items_engine(0)
    yield engine
    engine.dispose()
