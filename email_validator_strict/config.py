"""
Configuration Module

Validator options and their environment variable overrides.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .syntax import ValidationMode

ENV_CHECK_DOMAIN = 'EMAIL_VALIDATOR_CHECK_DOMAIN'
ENV_MODE = 'EMAIL_VALIDATOR_MODE'
ENV_DNS_TIMEOUT = 'EMAIL_VALIDATOR_DNS_TIMEOUT'

DEFAULT_DNS_TIMEOUT = 5.0


@dataclass(frozen=True)
class ValidatorOptions:
    """
    Options for a validation call.

    Attributes:
        check_domain: Whether to look up MX records for the domain
        validation_mode: Syntax strictness level
    """
    check_domain: bool = False
    validation_mode: ValidationMode = ValidationMode.REAL_WORLD

    def __post_init__(self):
        # Accept plain strings such as 'rfc'
        object.__setattr__(self, 'validation_mode', ValidationMode(self.validation_mode))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ValidatorOptions':
        """
        Build options from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            ValidatorOptions with defaults for unset variables

        Raises:
            ValueError: If EMAIL_VALIDATOR_MODE is not a known mode
        """
        if environ is None:
            environ = os.environ

        check_domain = environ.get(ENV_CHECK_DOMAIN, 'false').lower() == 'true'
        mode = environ.get(ENV_MODE, ValidationMode.REAL_WORLD.value).strip().lower()
        return cls(check_domain=check_domain, validation_mode=ValidationMode(mode))


def load_dns_timeout(environ: Optional[Mapping[str, str]] = None) -> float:
    """Read the DNS timeout in seconds from the environment."""
    if environ is None:
        environ = os.environ

    raw = environ.get(ENV_DNS_TIMEOUT)
    if raw is None or not raw.strip():
        return DEFAULT_DNS_TIMEOUT

    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"{ENV_DNS_TIMEOUT} must be a number, got {raw!r}") from None

    if timeout <= 0:
        raise ValueError(f"{ENV_DNS_TIMEOUT} must be positive, got {raw!r}")
    return timeout
