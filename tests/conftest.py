"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from pkgmerge.models.package import Source


@pytest.fixture
def repo1() -> Source:
    """First remote catalog source."""
    return Source(url="http://repo.com/url1", name="repo1")


@pytest.fixture
def repo2() -> Source:
    """Second remote catalog source."""
    return Source(url="http://repo.com/url2", name="repo2")


@pytest.fixture
def inventory_toml() -> str:
    """Sample local inventory snapshot."""
    return """[[package]]
type = "tool"
revision = 10

[[package]]
type = "platform"
revision = 2
api_level = 1
source = "http://repo.com/url1"

[[package]]
type = "extra"
revision = 4
vendor = "android"
name = "usb_driver"
"""


@pytest.fixture
def catalog_toml() -> str:
    """Sample remote catalog snapshot."""
    return """[[package]]
type = "tool"
revision = 11

[[package]]
type = "platform"
revision = 2
api_level = 1

[[package]]
type = "platform"
revision = 4
api_level = 2

[[package]]
type = "extra"
revision = 5
vendor = "android"
name = "usb_driver"
"""


@pytest.fixture
def config_dir(tmp_path: Path, inventory_toml: str, catalog_toml: str) -> Path:
    """Directory with a config.toml, an inventory and one catalog."""
    (tmp_path / "catalogs").mkdir()
    (tmp_path / "inventory.toml").write_text(inventory_toml)
    (tmp_path / "catalogs" / "repo1.toml").write_text(catalog_toml)
    (tmp_path / "config.toml").write_text(
        'inventory = "inventory.toml"\n'
        'sort_by = "api"\n'
        "\n"
        "[[sources]]\n"
        'url = "http://repo.com/url1"\n'
        'name = "repo1"\n'
        'catalog = "catalogs/repo1.toml"\n'
    )
    return tmp_path
