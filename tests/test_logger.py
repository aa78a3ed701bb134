from __future__ import annotations

import os
from pathlib import Path

from zihou import logger as app_logger


def test_log_file_lives_under_configured_directory() -> None:
    app_logger.get_logger()

    assert app_logger.DEFAULT_LOG_PATH.parent == Path(os.environ["ZIHOU_LOG_DIR"])
    assert app_logger.DEFAULT_LOG_PATH.name == "zihou.log"
    assert app_logger.DEFAULT_LOG_PATH.exists()
