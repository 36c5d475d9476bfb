import logging
import sys
from pathlib import Path

import pytest

# This file lives at <project_root>/tests/conftest.py
PROJECT_ROOT = Path(__file__).resolve().parents[1]

proj = str(PROJECT_ROOT)
if proj not in sys.path:
    sys.path.insert(0, proj)

from core.leitor import parse_pda  # noqa: E402

PARENTESES = """\
2
0
( )
( Z
0 ( Z -> 1 / (Z
1 ( ( -> 1 / ((
1 ) ( -> 1 / {e}
1 {e} Z -> 0 / Z
"""


@pytest.fixture
def parenteses_text():
    return PARENTESES


@pytest.fixture
def parenteses():
    return parse_pda(PARENTESES)


@pytest.fixture
def examples_dir():
    return PROJECT_ROOT / "exemplos"


@pytest.fixture(autouse=True)
def _reset_loggers():
    # main.setup_logger prende handlers ao stderr capturado de cada teste
    yield
    for name in ("core", "console", "gui", "config"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
