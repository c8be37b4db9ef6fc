"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import codec_config  # noqa: E402

ZERO_PHRASE = (
    "abandon abandon abandon abandon abandon abandon "
    "abandon abandon abandon abandon abandon about"
)


@pytest.fixture(autouse=True)
def fallback_config(monkeypatch):
    """Run every test against the hardcoded fallback defaults."""
    monkeypatch.delenv(codec_config.CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(codec_config, "_find_config", lambda: None)
    codec_config.reset()
    yield
    codec_config.reset()


@pytest.fixture
def zero_entropy():
    """The 16-byte all-zero buffer of the published BIP-39 test vector."""
    return bytes(16)


@pytest.fixture
def zero_phrase():
    return ZERO_PHRASE


@pytest.fixture
def zero_words():
    return ZERO_PHRASE.split()
