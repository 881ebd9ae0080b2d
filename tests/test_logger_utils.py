# Gentoo-Xfce-Setup/tests/test_logger_utils.py

import logging

import pytest

from xfce_setup import logger_utils


@pytest.fixture(autouse=True)
def restore_app_logger():
    yield
    logger_utils.setup_logger()


def test_logs_to_file(tmp_path):
    log_file = tmp_path / "logs" / "setup.log"
    logger = logger_utils.setup_logger(log_file)

    logger_utils.get_logger("provisioner").info("Running step 'sync package tree'")

    for handler in logger.handlers:
        handler.flush()
    content = log_file.read_text()
    assert "File logging initialized" in content
    assert "GentooXfceSetup.provisioner - INFO" in content
    assert len(logger.handlers) == 1


def test_unwritable_log_file_disables_file_logging(tmp_path, capsys):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")

    logger = logger_utils.setup_logger(blocker / "setup.log")

    assert [type(h) for h in logger.handlers] == [logging.NullHandler]
    assert "File logging disabled" in capsys.readouterr().err
