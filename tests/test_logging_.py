import logging

import numpy as np
import pytest

from bsfs.logging_ import configure_logging, get_logger
from bsfs.spectrum.classify import classify


def test_get_logger_namespace():
    assert get_logger().name == "bsfs"
    assert get_logger("bsfs.spectrum.aggregate").name == "bsfs.spectrum.aggregate"
    assert get_logger("pipeline").name == "bsfs.pipeline"


def test_configure_logging_accepts_level_names():
    configure_logging("debug")

    assert logging.DEBUG in (logging.getLogger("bsfs").level, logging.getLogger().level)


def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        configure_logging("chatty")


def test_skipped_haplotypes_are_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="bsfs"):
        classify(np.array([1, 1, 1]), {0: "popA", 2: "popA"})

    assert "Skipped 1 unmapped haplotype positions" in caplog.text
