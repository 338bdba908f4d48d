import pytest

from healthboard.web import WebConfig, WebConfigError, default_web_config


def test_default_config():
    cfg = default_web_config()
    assert cfg.port == 8080
    assert cfg.address == "0.0.0.0"


def test_validate_fills_defaults():
    cfg = WebConfig()
    cfg.validate_and_set_defaults()
    assert cfg.address == "0.0.0.0"
    assert cfg.port == 8080


def test_validate_keeps_explicit_values():
    cfg = WebConfig(address="127.0.0.1", port=9000)
    cfg.validate_and_set_defaults()
    assert (cfg.address, cfg.port) == ("127.0.0.1", 9000)


@pytest.mark.parametrize("port", [100000000, -1, 65536])
def test_validate_rejects_invalid_port(port):
    with pytest.raises(WebConfigError, match="invalid port"):
        WebConfig(port=port).validate_and_set_defaults()


def test_max_port_is_accepted():
    cfg = WebConfig(port=65535)
    cfg.validate_and_set_defaults()
    assert cfg.port == 65535


def test_socket_address():
    assert WebConfig(address="0.0.0.0", port=8081).socket_address() == "0.0.0.0:8081"