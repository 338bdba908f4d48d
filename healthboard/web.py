"""Configuration of the address and port the web frontend listens on."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_ADDRESS = "0.0.0.0"
DEFAULT_PORT = 8080
MAX_PORT = 65535


class WebConfigError(ValueError):
    """Raised when the web configuration is invalid."""


@dataclass
class WebConfig:
    """Address and port of the web server; empty values mean defaults."""

    address: str = ""
    port: int = 0

    def validate_and_set_defaults(self) -> None:
        if not self.address:
            self.address = DEFAULT_ADDRESS
        if self.port == 0:
            self.port = DEFAULT_PORT
        elif self.port < 0 or self.port > MAX_PORT:
            raise WebConfigError(
                f"invalid port: value should be between 0 and {MAX_PORT}"
            )

    def socket_address(self) -> str:
        return f"{self.address}:{self.port}"


def default_web_config() -> WebConfig:
    """Return the configuration used when none is given."""
    return WebConfig(address=DEFAULT_ADDRESS, port=DEFAULT_PORT)