"""
Strict Email Validator Package

Provides email syntax validation in 'real-world' and 'rfc' modes with an
optional DNS MX record check.
"""

import logging

from .config import ValidatorOptions
from .dns_service import DNSService, DNSServiceBase, LookupStatus, MXLookupResult, MXRecord, MockDNSService
from .syntax import SyntaxResult, ValidationMode, classify, is_valid_syntax
from .validator import EmailValidator, ValidationResult, validate_email_strict

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'DNSService',
    'DNSServiceBase',
    'EmailValidator',
    'LookupStatus',
    'MXLookupResult',
    'MXRecord',
    'MockDNSService',
    'SyntaxResult',
    'ValidationMode',
    'ValidationResult',
    'ValidatorOptions',
    'classify',
    'is_valid_syntax',
    'validate_email_strict',
]
__version__ = '1.0.2'
