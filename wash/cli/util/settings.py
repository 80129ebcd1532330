"""Settings bootstrap shared by every command."""

import logging

import logfire
import yaml
from pydantic import ValidationError

from wash.config import Config, configure_logging
from wash.domain.shared.error import ConfigurationError

logger = logging.getLogger(__name__)


def load_config(*, insecure: bool = False) -> Config:
    """Load settings, configure logging and apply command-line overrides.

    Raises:
        ConfigurationError: If the environment or config file is invalid
    """
    try:
        config = Config()  # type: ignore[call-arg]
    except (ValidationError, yaml.YAMLError, OSError) as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    configure_logging(config.logging)
    logfire.configure(send_to_logfire="if-token-present", console=False)

    if insecure:
        registry = config.registry.model_copy(update={"insecure": True})
        config = config.model_copy(update={"registry": registry})

    logger.debug(
        "Registry settings: insecure=%s tls_verify=%s",
        config.registry.insecure,
        config.registry.tls_verify,
    )
    return config
