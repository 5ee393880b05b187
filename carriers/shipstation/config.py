"""
Ship Station Method Configuration

Stored settings for one Ship Station shipping method. Only `services` affects
rating; API credentials and the origin postal code are kept so stored
configuration round-trips, but the flat-rate calculator never reads them.

STORED LAYOUT
-------------
    {
        "api": {
            "customer_number": "", "username": "", "password": "",
            "contract_id": "", "mode": "test", "log": []
        },
        "api_key": "",
        "api_secret": "",
        "shipping_information": {"origin_postal_code": "", "option_codes": []},
        "services": ["DOM.EP", "DOM.RP", "USA.XP", "Free"]
    }

USAGE
-----
    from carriers.shipstation.config import load_configuration
    config = load_configuration("shipstation.json")
"""

import copy
import json
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from pathlib import Path

from shared.log import get_logger

from .data import SERVICES
from .data.reference import DEFAULT_SERVICE_CODES


logger = get_logger(__name__)


MODES = ("test", "live")

DEFAULT_CONFIGURATION = {
    "api": {
        "customer_number": "",
        "username": "",
        "password": "",
        "contract_id": "",
        "mode": "test",
        "log": [],
    },
    "api_key": "",
    "api_secret": "",
    "shipping_information": {
        "origin_postal_code": "",
        "option_codes": [],
    },
    "services": list(DEFAULT_SERVICE_CODES),
}


def default_configuration() -> dict:
    """Fresh copy of the default stored configuration."""
    return copy.deepcopy(DEFAULT_CONFIGURATION)


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass
class ApiCredentials:
    customer_number: str = ""
    username: str = ""
    password: str = field(default="", repr=False)
    contract_id: str = ""
    mode: str = "test"
    log: list = field(default_factory=list)


@dataclass
class ShippingInformation:
    origin_postal_code: str = ""
    option_codes: list = field(default_factory=list)


@dataclass
class ShippingMethodConfig:
    """Configuration for one Ship Station shipping method."""

    api: ApiCredentials = field(default_factory=ApiCredentials)
    api_key: str = field(default="", repr=False)
    api_secret: str = field(default="", repr=False)
    shipping_information: ShippingInformation = field(default_factory=ShippingInformation)
    services: list[str] = field(default_factory=lambda: list(DEFAULT_SERVICE_CODES))

    @classmethod
    def from_dict(cls, values: Mapping, strict: bool = False) -> "ShippingMethodConfig":
        """
        Build configuration from stored values, filling gaps with defaults.

        Unknown keys are ignored (the host stores its own settings alongside).

        Args:
            values: Stored configuration (see module docstring)
            strict: Also require the fields the settings form requires

        Raises:
            ValueError: If values is not a mapping or validation fails
        """
        if not isinstance(values, Mapping):
            raise ValueError(f"Configuration must be a mapping, got {type(values).__name__}")

        merged = default_configuration()
        for key in ("api", "shipping_information"):
            section = values.get(key) or {}
            if not isinstance(section, Mapping):
                raise ValueError(f"{key} must be a mapping, got {type(section).__name__}")
            merged[key].update({k: v for k, v in section.items() if k in merged[key]})
        for key in ("api_key", "api_secret", "services"):
            if values.get(key) is not None:
                merged[key] = values[key]

        ignored = sorted(set(values) - set(merged))
        if ignored:
            logger.debug("configuration_keys_ignored", keys=ignored)

        services = merged["services"]
        if isinstance(services, str):
            services = [s.strip() for s in services.split(",") if s.strip()]

        config = cls(
            api=ApiCredentials(**merged["api"]),
            api_key=merged["api_key"],
            api_secret=merged["api_secret"],
            shipping_information=ShippingInformation(**merged["shipping_information"]),
            services=list(services),
        )
        config.validate(strict=strict)
        return config

    def to_dict(self) -> dict:
        return asdict(self)

    def validate(self, strict: bool = False) -> None:
        """
        Check configuration integrity.

        Always checked: API mode, service codes, at least one service.
        With strict=True, also the fields the settings form marks required:
        api_key, api_secret, origin_postal_code.

        Raises:
            ValueError: Listing every problem found
        """
        errors = []

        if self.api.mode not in MODES:
            errors.append(f"api.mode: '{self.api.mode}' must be one of {', '.join(MODES)}")

        if not self.services:
            errors.append("services: at least one service must be enabled")

        unknown = [code for code in self.services if code not in SERVICES]
        if unknown:
            errors.append(f"services: unknown code(s) {', '.join(map(str, unknown))}")

        if strict:
            if not self.api_key:
                errors.append("api_key: required")
            if not self.api_secret:
                errors.append("api_secret: required")
            if not self.shipping_information.origin_postal_code:
                errors.append("shipping_information.origin_postal_code: required")

        if errors:
            raise ValueError("Configuration errors:\n  " + "\n  ".join(errors))

    def api_is_configured(self) -> bool:
        """True if there is enough information to connect to the carrier API."""
        return bool(
            self.api.username
            and self.api.password
            and self.api.customer_number
            and self.api.mode
        )


def load_configuration(path: str | Path, strict: bool = False) -> ShippingMethodConfig:
    """
    Load configuration from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid JSON or validation fails
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        values = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path.name} is not valid JSON: {e}") from e

    config = ShippingMethodConfig.from_dict(values, strict=strict)
    logger.debug("configuration_loaded", path=str(path), services=config.services)
    return config


__all__ = [
    "MODES",
    "DEFAULT_CONFIGURATION",
    "default_configuration",
    "ApiCredentials",
    "ShippingInformation",
    "ShippingMethodConfig",
    "load_configuration",
]
