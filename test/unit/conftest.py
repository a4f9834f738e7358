import logging
import os
import textwrap

import pytest

from iniread.parser import loads

SAMPLE_INI = textwrap.dedent(
    """\
    # sample configuration
    proc_name = test.ini
    $%^#@! = shen zhen
    名字 = 小明

    [main]
    type = server
    len = a value that is longer than most buffers

    [int]
    int = -42
    unsigned = 0x2A
    int8 = -128
    uint8 = 255
    int16 = 017
    uint16 = 65535
    int32 = 2147483647
    uint32 = 4294967295
    int64 = -9223372036854775808
    uint64 = 18446744073709551615
    overflow8 = 256
    word = abc

    ; floats
    [float]
    float = 3.5
    double = 1.25e-3
    bad = 1.2.3

    [addr]
    ipv4 = 192.168.1.10:8080
    spaced = 10.0.0.1 53
    bad = 300.1.1.1:80

    [damon]
    phone num = 123 456 \\
    789
    enabled = TRUE
    maybe = perhaps
    """
)


@pytest.fixture
def sample_text():
    return SAMPLE_INI


@pytest.fixture
def sample_document():
    return loads(SAMPLE_INI)


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "test.ini"
    path.write_text(SAMPLE_INI, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep the user's iniread settings out of the tests."""
    for key in list(os.environ):
        if key.startswith("INIREAD_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr("iniread.config.DEFAULT_CONFIG_DIRS", [tmp_path / "etc"])


@pytest.fixture(autouse=True)
def reset_logger():
    """Undo whatever configure_logger did to the package logger during a test."""
    logger = logging.getLogger("iniread")
    handlers = list(logger.handlers)
    propagate, level = logger.propagate, logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
    logger.propagate = propagate
    logger.setLevel(level)
