"""Pytest fixtures for all tests."""

import random
from datetime import datetime, timezone

import pytest
from typer.testing import CliRunner

from cli.app import create_app
from config import CliConfig, Config, LoggingConfig
from core.generator import Generator
from core.ksuid import Ksuid

PAYLOAD_RAW = "B5A1CD34B5F99D1154FB6853345C9735"
PAYLOAD_BYTES = bytes.fromhex(PAYLOAD_RAW)
KSUID_RAW = "000669F7EF" + PAYLOAD_RAW
KSUID_BYTES = bytes.fromhex(KSUID_RAW)
KSUID_STRING = "000ujtsYcgvSTl8PAuAdqWYSMnLOv"
TIMESTAMP = 107608047

FIXED_NOW = datetime(2022, 2, 9, 6, 27, 52, 573000, tzinfo=timezone.utc)


@pytest.fixture(params=["bytes", "string", "parts"])
def ksuid(request):
    """The reference KSUID built through each construction path."""
    builders = {
        "bytes": lambda: Ksuid.from_bytes(KSUID_BYTES),
        "string": lambda: Ksuid.from_string(KSUID_STRING),
        "parts": lambda: Ksuid.from_parts(TIMESTAMP, PAYLOAD_BYTES),
    }
    return builders[request.param]()


@pytest.fixture
def fixed_generator():
    """Seeded generator with a frozen clock."""
    return Generator.from_random(random.Random(123), clock=lambda: FIXED_NOW)


@pytest.fixture
def cli_config():
    """CLI config rendering times in UTC with quiet logging."""
    return Config(CliConfig(timezone="UTC"), LoggingConfig(level="ERROR"))


@pytest.fixture
def app(cli_config, fixed_generator):
    """Create test ksuid command."""
    return create_app(config=cli_config, generator=fixed_generator)


@pytest.fixture
def runner():
    return CliRunner()
