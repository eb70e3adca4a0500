"""
Test configuration for the MRZ engine test suite.
"""

import logging
import os
from datetime import date

import pytest

from mrz_engine.logging_config import ServiceNameFilter

# Reference date used for century resolution throughout the suite
REFERENCE_DATE = date(2024, 6, 1)

# ICAO Doc 9303 specimen documents (Utopia)
SAMPLE_TD1_MRZ = (
    "I<UTOD231458907<<<<<<<<<<<<<<<",
    "7408122F1204159UTO<<<<<<<<<<<6",
    "ERIKSSON<<ANNA<MARIA<<<<<<<<<<",
)

SAMPLE_TD1_NLD_MRZ = (
    "I<NLDXI85935F86999999990<<<<<<",
    "7208148F1108268NLD<<<<<<<<<<<4",
    "VAN<DER<STEEN<<MARIANNE<LOUISE",
)

SAMPLE_TD2_MRZ = (
    "I<UTOERIKSSON<<ANNA<MARIA".ljust(36, "<"),
    "D231458907UTO7408122F1204159<<<<<<<6",
)

SAMPLE_TD3_MRZ = (
    "P<UTOERIKSSON<<ANNA<MARIA".ljust(44, "<"),
    "L898902C36UTO7408122F1204159ZE184226B<<<<<10",
)

SAMPLE_MRV_A_MRZ = (
    "V<UTOERIKSSON<<ANNA<MARIA".ljust(44, "<"),
    "L8988901C4XXX4009078F96121096ZE184226B<<<<<<",
)

SAMPLE_MRV_B_MRZ = (
    "V<UTOERIKSSON<<ANNA<MARIA".ljust(36, "<"),
    "L8988901C4XXX4009078F9612109<<<<<<<<",
)


# Test markers
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "mrz: mark test as MRZ related")
    config.addinivalue_line("markers", "cli: mark test as exercising the command line")


# Collection settings
def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        if "mrz" in item.name.lower():
            item.add_marker(pytest.mark.mrz)
        if "cli" in str(item.fspath):
            item.add_marker(pytest.mark.cli)


# Test environment setup
@pytest.fixture(scope="session", autouse=True)
def test_environment_setup():
    """Set up test environment."""
    original_env = os.environ.copy()

    os.environ["MRZ_ENVIRONMENT"] = "testing"

    yield

    # Restore environment
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def restore_root_logger():
    """Drop handlers installed by setup_logging and restore the root level."""
    root_logger = logging.getLogger()
    level = root_logger.level

    yield root_logger

    for handler in root_logger.handlers[:]:
        if any(isinstance(f, ServiceNameFilter) for f in handler.filters):
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture
def reference_date():
    """Provide the fixed reference date."""
    return REFERENCE_DATE


@pytest.fixture
def td1_mrz():
    return list(SAMPLE_TD1_MRZ)


@pytest.fixture
def td2_mrz():
    return list(SAMPLE_TD2_MRZ)


@pytest.fixture
def td3_mrz():
    return list(SAMPLE_TD3_MRZ)


@pytest.fixture
def mrv_a_mrz():
    return list(SAMPLE_MRV_A_MRZ)


@pytest.fixture
def mrv_b_mrz():
    return list(SAMPLE_MRV_B_MRZ)


@pytest.fixture
def settings_file(tmp_path):
    """Write a YAML settings file and return its path."""

    def _write(content: str):
        path = tmp_path / "mrz-engine.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
