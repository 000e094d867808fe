import dataclasses

import pytest

from wdpdbg import ClientConfig, Endpoint
from wdpdbg.endpoint import page_from_url


def test_default_endpoint_url():
    assert Endpoint().url == "ws://localhost:9222/devtools/page/1"


def test_endpoint_from_config_uses_port_and_page():
    endpoint = Endpoint.from_config(ClientConfig(port=9223, page=5))
    assert endpoint.url == "ws://localhost:9223/devtools/page/5"
    assert endpoint.list_url == "http://localhost:9223/json"


def test_endpoint_is_immutable():
    endpoint = Endpoint()
    with pytest.raises(dataclasses.FrozenInstanceError):
        endpoint.port = 1  # type: ignore[misc]


def test_page_from_url():
    assert page_from_url("ws://localhost:9222/devtools/page/7") == 7
    assert page_from_url("ws://localhost:9222/devtools/browser") is None
    assert page_from_url("") is None
