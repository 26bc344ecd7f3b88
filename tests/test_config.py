import os
from unittest import mock

import pytest

from zarrwrap.core.config import BadConfigError, config, parse_indexing_order


def test_config_defaults_set() -> None:
    # regression test for available defaults
    assert config.defaults == [
        {
            "array": {"order": "C"},
            "read": {"allow_partial": True},
        }
    ]
    assert config.get("array.order") == "C"
    assert config.get("read.allow_partial") is True


def test_config_set_context() -> None:
    with config.set({"read.allow_partial": False}):
        assert config.get("read.allow_partial") is False
    assert config.get("read.allow_partial") is True


def test_config_from_environment() -> None:
    with mock.patch.dict(os.environ, {"ZARRWRAP_READ__ALLOW_PARTIAL": "False"}):
        config.refresh()
        assert config.get("read.allow_partial") is False
    config.reset()
    assert config.get("read.allow_partial") is True


@pytest.mark.parametrize("order", ["C", "F"])
def test_parse_indexing_order(order: str) -> None:
    assert parse_indexing_order(order) == order


def test_parse_indexing_order_invalid() -> None:
    with pytest.raises(BadConfigError, match="Expected one of"):
        parse_indexing_order("K")
