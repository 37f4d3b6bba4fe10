"""
Email Validator Module

Contains the EmailValidator class and the validate_email_strict coroutine.
"""

import asyncio
import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from .config import DEFAULT_DNS_TIMEOUT, ValidatorOptions, load_dns_timeout
from .dns_service import DNSService, DNSServiceBase, LookupStatus
from .syntax import SyntaxResult, ValidationMode, classify, trim

MX_ERRORS = {
    LookupStatus.EMPTY: "No MX records found for domain",
    LookupStatus.NOT_FOUND: "Domain does not exist",
    LookupStatus.NO_DATA: "No MX records found for domain",
    LookupStatus.SERVER_FAILURE: "DNS server failure",
    LookupStatus.TIMEOUT: "DNS lookup timed out",
    LookupStatus.ERROR: "DNS lookup failed",
}


@dataclass
class ValidationResult:
    """
    Represents the result of an email validation.

    Attributes:
        is_valid: Whether the email is valid
        email: The trimmed email address that was validated
        validation_mode: Syntax mode used
        domain: Domain part (None if syntax was rejected)
        errors: List of validation errors
        mx_valid: Whether MX record exists (None if not checked)
        mx_status: Outcome of the MX lookup (None if not checked)
    """
    is_valid: bool
    email: str
    validation_mode: ValidationMode
    domain: Optional[str] = None
    errors: list = dataclasses.field(default_factory=list)
    mx_valid: Optional[bool] = None
    mx_status: Optional[LookupStatus] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary format."""
        return {
            'is_valid': self.is_valid,
            'email': self.email,
            'validation_mode': self.validation_mode.value,
            'domain': self.domain,
            'errors': self.errors,
            'mx_valid': self.mx_valid,
            'mx_status': self.mx_status.value if self.mx_status else None,
        }


def _ensure_str(email) -> None:
    if not isinstance(email, str):
        raise TypeError('Input must be a string.')


class EmailValidator:
    """
    Email validator with selectable syntax mode and optional MX check.

    Syntax is checked first; the MX lookup only runs for addresses the
    selected grammar accepts, and only when check_domain is enabled.

    Example:
        >>> validator = EmailValidator()
        >>> asyncio.run(validator.is_valid('user@example.com'))
        True
    """

    def __init__(
        self,
        check_domain: bool = False,
        validation_mode: Union[ValidationMode, str] = ValidationMode.REAL_WORLD,
        dns_service: Optional[DNSServiceBase] = None,
        dns_timeout: float = DEFAULT_DNS_TIMEOUT,
    ):
        """
        Initialize the EmailValidator.

        Args:
            check_domain: Whether to check MX records during validation
            validation_mode: 'real-world' (default) or 'rfc'
            dns_service: Optional DNS service; a DNSService is created on
                         first use when omitted
            dns_timeout: Timeout for the DNSService created on first use
        """
        self.check_domain = check_domain
        self.validation_mode = ValidationMode(validation_mode)
        self.dns_service = dns_service
        self.dns_timeout = dns_timeout

    @classmethod
    def from_options(
        cls,
        options: Optional[ValidatorOptions] = None,
        dns_service: Optional[DNSServiceBase] = None,
    ) -> 'EmailValidator':
        """Create a validator from a ValidatorOptions instance."""
        options = options or ValidatorOptions()
        return cls(
            check_domain=options.check_domain,
            validation_mode=options.validation_mode,
            dns_service=dns_service,
        )

    @classmethod
    def from_env(cls, environ=None, dns_service: Optional[DNSServiceBase] = None) -> 'EmailValidator':
        """Create a validator configured from EMAIL_VALIDATOR_* variables."""
        options = ValidatorOptions.from_env(environ)
        return cls(
            check_domain=options.check_domain,
            validation_mode=options.validation_mode,
            dns_service=dns_service,
            dns_timeout=load_dns_timeout(environ),
        )

    def _get_dns_service(self) -> DNSServiceBase:
        if self.dns_service is None:
            self.dns_service = DNSService(timeout=self.dns_timeout)
        return self.dns_service

    def check_syntax(self, email: str) -> SyntaxResult:
        """
        Classify the trimmed email address without any DNS lookup.

        Raises:
            TypeError: If email is not a string
        """
        _ensure_str(email)
        return classify(trim(email), self.validation_mode)

    async def validate(self, email: str) -> ValidationResult:
        """
        Validate an email address.

        Performs syntax validation and optionally MX record checking.

        Args:
            email: The email address to validate

        Returns:
            ValidationResult object with validation details

        Raises:
            TypeError: If email is not a string
        """
        _ensure_str(email)
        trimmed = trim(email)

        syntax = classify(trimmed, self.validation_mode)
        if not syntax.accepted:
            return ValidationResult(
                is_valid=False,
                email=trimmed,
                validation_mode=self.validation_mode,
                errors=[syntax.error],
            )

        if not self.check_domain:
            return ValidationResult(
                is_valid=True,
                email=trimmed,
                validation_mode=self.validation_mode,
                domain=syntax.domain,
            )

        lookup = await self._get_dns_service().lookup_mx(syntax.domain)
        errors = [] if lookup.reachable else [MX_ERRORS[lookup.status]]

        return ValidationResult(
            is_valid=lookup.reachable,
            email=trimmed,
            validation_mode=self.validation_mode,
            domain=syntax.domain,
            errors=errors,
            mx_valid=lookup.reachable,
            mx_status=lookup.status,
        )

    async def validate_batch(self, emails: list) -> List[ValidationResult]:
        """
        Validate multiple email addresses concurrently.

        Args:
            emails: List of email addresses to validate

        Returns:
            List of ValidationResult objects in input order

        Raises:
            TypeError: If any email is not a string; no lookup is started
        """
        for email in emails:
            _ensure_str(email)
        return list(await asyncio.gather(*(self.validate(email) for email in emails)))

    async def is_valid(self, email: str) -> bool:
        """
        Quick check if email is valid.

        Args:
            email: The email address to validate

        Returns:
            True if email is valid, False otherwise
        """
        result = await self.validate(email)
        return result.is_valid


async def validate_email_strict(
    email: str,
    options: Optional[ValidatorOptions] = None,
    *,
    check_domain: Optional[bool] = None,
    validation_mode: Union[ValidationMode, str, None] = None,
    dns_service: Optional[DNSServiceBase] = None,
) -> bool:
    """
    Validate an email address with configurable syntax rules and an
    optional DNS MX record check.

    Args:
        email: The email address string to validate
        options: Optional ValidatorOptions
        check_domain: Overrides options.check_domain (default False)
        validation_mode: Overrides options.validation_mode (default 'real-world')
        dns_service: DNS service used for the MX lookup. When omitted, each
                     call with check_domain builds its own DNSService; hold
                     an EmailValidator or pass a shared service to reuse
                     one resolver across calls.

    Returns:
        True if the email is valid according to the options, otherwise False

    Raises:
        TypeError: If email is not a string
        ValueError: If validation_mode is not a known mode
    """
    _ensure_str(email)

    options = options or ValidatorOptions()
    overrides = {}
    if check_domain is not None:
        overrides['check_domain'] = check_domain
    if validation_mode is not None:
        overrides['validation_mode'] = validation_mode
    if overrides:
        options = dataclasses.replace(options, **overrides)

    validator = EmailValidator.from_options(options, dns_service=dns_service)
    return await validator.is_valid(email)
