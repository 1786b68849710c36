"""
Locator configuration

Immutable policy knobs for the service locator, optionally loaded from the
environment (and a ``.env`` file) via python-dotenv.
"""

import os
from pathlib import Path
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from service_locator.exceptions import ConfigValidationError
from service_locator.logging import get_logger

logger = get_logger(__name__)

ENV_THROW_ON_ERROR = 'LOCATOR_THROW_ON_ERROR'
ENV_ALLOW_MULTIPLE_INSTANCES = 'LOCATOR_ALLOW_MULTIPLE_INSTANCES'

_TRUE_VALUES = {'true', '1', 'yes', 'on'}
_FALSE_VALUES = {'false', '0', 'no', 'off'}


def _parse_bool(config_key: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or raw.strip() == '':
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(
        f"{config_key} must be one of {sorted(_TRUE_VALUES | _FALSE_VALUES)}",
        config_key=config_key,
        value=raw,
    )


class LocatorConfig(BaseModel):
    """Locator error and multiplicity policy

    throw_on_error: raise on conflict/not-found instead of logging a warning.
        Internal adapter errors are raised regardless.
    allow_multiple_instances: let registrations with the same RegistryKey
        accumulate instead of rejecting the second one as a conflict.
    """
    model_config = ConfigDict(frozen=True)

    throw_on_error: bool = Field(default=False, description="Raise instead of log-and-degrade")
    allow_multiple_instances: bool = Field(default=True, description="Allow duplicate RegistryKeys")

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> 'LocatorConfig':
        """
        Build a config from LOCATOR_* environment variables.

        Args:
            env_file: .env path loaded first; when omitted, the nearest .env
                found from the working directory upwards is used. Existing
                environment variables take precedence over its values

        Raises:
            ConfigValidationError: a variable holds an unrecognized boolean
        """
        if env_file is not None:
            env_path = Path(env_file)
            if env_path.exists():
                load_dotenv(env_path)
                logger.debug(f"Loaded .env from {env_path}")
            else:
                logger.warning(f".env file not found: {env_path}")
        else:
            env_path = find_dotenv(usecwd=True)
            if env_path:
                load_dotenv(env_path)
                logger.debug(f"Loaded .env from {env_path}")

        defaults = cls()
        return cls(
            throw_on_error=_parse_bool(
                ENV_THROW_ON_ERROR,
                os.getenv(ENV_THROW_ON_ERROR),
                defaults.throw_on_error,
            ),
            allow_multiple_instances=_parse_bool(
                ENV_ALLOW_MULTIPLE_INSTANCES,
                os.getenv(ENV_ALLOW_MULTIPLE_INSTANCES),
                defaults.allow_multiple_instances,
            ),
        )
