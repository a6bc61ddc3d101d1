import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

import boto3

from .errors import ConfigError

logger = logging.getLogger(__name__)

SECTIONS = ("Source", "Target")


@dataclass
class EndpointConfig:
    region: Optional[str] = None
    profile: Optional[str] = None
    service_url: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None

    def __post_init__(self) -> None:
        if bool(self.access_key) != bool(self.secret_key):
            raise ConfigError("AccessKey and SecretKey must be given together")

    @classmethod
    def from_section(cls, section, name="section"):
        """Build from a settings section whose keys are already lower-cased."""
        credentials = section.get("credentials") or {}
        if not isinstance(credentials, dict):
            raise ConfigError(f"{name} Credentials must be an object")
        return cls(
            region=section.get("region"),
            profile=section.get("profile"),
            service_url=section.get("serviceurl"),
            access_key=credentials.get("accesskey"),
            secret_key=credentials.get("secretkey"),
        )


def _read_settings_file(path):
    try:
        with open(path) as f:
            settings = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read settings file {path}: {e}") from e
    except ValueError as e:
        raise ConfigError(f"Settings file {path} is not valid JSON: {e}") from e
    if not isinstance(settings, dict):
        raise ConfigError(f"Settings file {path} must contain a JSON object")
    return settings


def _lower_keys(node):
    # Keys are case-insensitive: ServiceURL, serviceUrl and SERVICEURL are one key.
    if isinstance(node, dict):
        return {str(key).lower(): _lower_keys(value) for key, value in node.items()}
    return node


def _apply_environment(settings, environ):
    # Source__Credentials__AccessKey -> settings["source"]["credentials"]["accesskey"]
    sections = {name.lower() for name in SECTIONS}
    for key, value in environ.items():
        parts = key.lower().split("__")
        if len(parts) < 2 or parts[0] not in sections:
            continue
        node = settings
        for depth, part in enumerate(parts[:-1], start=1):
            child = node.get(part)
            if child is None:
                child = node[part] = {}
            elif not isinstance(child, dict):
                raise ConfigError(f"Cannot apply {key}: {'__'.join(parts[:depth])} is not an object")
            node = child
        node[parts[-1]] = value
    return settings


def load_settings(path=None, environ=None):
    """Return the (source, target) endpoint configs.

    Values from the JSON settings file at ``path`` are overridden by
    environment variables of the form ``Source__Region``. Keys are matched
    without regard to case.
    """
    if environ is None:
        environ = os.environ
    settings = _lower_keys(_read_settings_file(path)) if path is not None else {}

    for name in SECTIONS:
        section = settings.get(name.lower())
        if section is not None and not isinstance(section, dict):
            raise ConfigError(f"{name} configuration must be an object")

    settings = _apply_environment(settings, environ)

    endpoints = []
    for name in SECTIONS:
        section = settings.get(name.lower()) or {}
        endpoints.append(EndpointConfig.from_section(section, name))
        logger.debug("%s endpoint: %s", name, endpoints[-1].region or "default region")
    return tuple(endpoints)


def create_client(config: EndpointConfig):
    session = boto3.Session(
        profile_name=config.profile,
        region_name=config.region,
        aws_access_key_id=config.access_key,
        aws_secret_access_key=config.secret_key,
    )
    return session.client("dynamodb", endpoint_url=config.service_url)
