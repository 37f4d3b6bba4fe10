"""
Syntax Classifier Module

Decides whether an email address is syntactically acceptable under one of
two validation modes:

- ``real-world`` (default): rejects quoted local parts, IP literals and
  single-label domains such as ``user@localhost``. Domain labels must start
  and end with an alphanumeric character and the TLD needs at least two
  letters. Underscores are allowed in the local part.
- ``rfc``: accepts the forms rejected above. This mode is lenient on purpose
  and still admits single-character TLDs, labels starting or ending with a
  hyphen and loosely structured IPv6 literals.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ValidationMode(str, Enum):
    """Syntax strictness level."""

    REAL_WORLD = 'real-world'
    RFC = 'rfc'


@dataclass(frozen=True)
class SyntaxResult:
    """
    Outcome of syntax classification.

    Attributes:
        accepted: Whether the address matched the selected grammar
        local: The local part (None if rejected)
        domain: The domain part (None if rejected)
        error: Reason for rejection (None if accepted)
    """
    accepted: bool
    local: Optional[str] = None
    domain: Optional[str] = None
    error: Optional[str] = None


# Whitespace trimmed from input and excluded from real-world local parts.
# Pinned explicitly: \x1c-\x1f are not whitespace here, U+FEFF is.
WHITESPACE = (
    '\t\n\x0b\x0c\r \xa0\u1680'
    + ''.join(chr(c) for c in range(0x2000, 0x200b))
    + '\u2028\u2029\u202f\u205f\u3000\ufeff'
)

_UNRESTRICTED = r'[^<>()\[\]\\.,;:@"' + re.escape(WHITESPACE) + r']+'

# Real-world grammar: dot-separated runs of unrestricted characters, then a
# hostname with at least one dot and an alphabetic TLD of two or more letters.
REAL_WORLD_REGEX = re.compile(
    r'(?P<local>'
    + _UNRESTRICTED + r'(?:\.' + _UNRESTRICTED + r')*'
    r')'
    r'@'
    r'(?P<domain>'
    r'(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}'
    r')'
)

_RFC_UNQUOTED_LOCAL = (
    r"[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+)*"
)
_RFC_QUOTED_LOCAL = r'"(?:[^"\\]|\\.)*"'

# Hyphens anywhere, single label allowed
_RFC_DOMAIN = r'(?:[a-zA-Z0-9-]+\.)*[a-zA-Z0-9-]+'
_OCTET = r'(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)'
_RFC_IPV4 = r'\[' + _OCTET + r'(?:\.' + _OCTET + r'){3}\]'
# Structure only, the address itself is not checked
_RFC_IPV6 = r'\[IPv6:[a-fA-F0-9:]+\]'

RFC_REGEX = re.compile(
    r'(?P<local>' + _RFC_UNQUOTED_LOCAL + r'|' + _RFC_QUOTED_LOCAL + r')'
    r'@'
    r'(?P<domain>' + _RFC_DOMAIN + r'|' + _RFC_IPV4 + r'|' + _RFC_IPV6 + r')'
)

GRAMMARS = {
    ValidationMode.REAL_WORLD: REAL_WORLD_REGEX,
    ValidationMode.RFC: RFC_REGEX,
}


def get_grammar(mode: Union[ValidationMode, str]) -> re.Pattern:
    """Return the compiled grammar for a validation mode."""
    return GRAMMARS[ValidationMode(mode)]


def trim(email: str) -> str:
    """Strip leading and trailing WHITESPACE characters."""
    return email.strip(WHITESPACE)


def _refine_rfc_domain(domain: str) -> Optional[str]:
    """
    Second pass over an unbracketed domain accepted by the rfc grammar.

    Only blocks empty labels. Single-character TLDs and hyphen-edged labels
    are still accepted.

    Returns:
        Error message, or None if the domain passes
    """
    if domain.startswith('['):
        return None

    labels = domain.split('.')
    if not labels[-1]:
        return "Domain has an empty top-level label"
    if any(not label for label in labels):
        return "Domain contains an empty label"
    return None


def classify(email: str, mode: Union[ValidationMode, str] = ValidationMode.REAL_WORLD) -> SyntaxResult:
    """
    Classify an already trimmed email address.

    Args:
        email: The email address, trimmed by the caller
        mode: Validation mode selecting the grammar

    Returns:
        SyntaxResult with the extracted parts when accepted

    Raises:
        ValueError: If mode is not a known validation mode
    """
    mode = ValidationMode(mode)

    if not email:
        return SyntaxResult(accepted=False, error="Email address is empty")

    match = get_grammar(mode).fullmatch(email)
    if not match:
        return SyntaxResult(
            accepted=False,
            error=f"Email does not match the {mode.value} grammar"
        )

    local = match.group('local')
    domain = match.group('domain')

    if mode is ValidationMode.RFC:
        error = _refine_rfc_domain(domain)
        if error:
            return SyntaxResult(accepted=False, error=error)

    return SyntaxResult(accepted=True, local=local, domain=domain)


def is_valid_syntax(email: str, mode: Union[ValidationMode, str] = ValidationMode.REAL_WORLD) -> bool:
    """
    Quick syntax-only check.

    Args:
        email: The email address to check
        mode: Validation mode selecting the grammar

    Returns:
        True if the trimmed address is accepted, False otherwise

    Raises:
        TypeError: If email is not a string
    """
    if not isinstance(email, str):
        raise TypeError('Input must be a string.')
    return classify(trim(email), mode).accepted
