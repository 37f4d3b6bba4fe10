"""
DNS Service Module

Provides the MX lookup used to decide whether an email domain is
configured to receive mail.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

import dns.asyncresolver
import dns.exception
import dns.resolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MXRecord:
    """A single mail exchanger advertised by a domain."""
    exchange: str
    priority: int


class LookupStatus(Enum):
    """Outcome of an MX lookup."""

    FOUND = 'found'
    EMPTY = 'empty'
    NOT_FOUND = 'not_found'
    NO_DATA = 'no_data'
    SERVER_FAILURE = 'server_failure'
    TIMEOUT = 'timeout'
    ERROR = 'error'


CLASSIFIED_FAILURES = frozenset({
    LookupStatus.NOT_FOUND,
    LookupStatus.NO_DATA,
    LookupStatus.SERVER_FAILURE,
    LookupStatus.TIMEOUT,
})


@dataclass(frozen=True)
class MXLookupResult:
    """
    Represents the result of a single MX lookup.

    Attributes:
        domain: The domain that was looked up
        status: How the lookup ended
        records: MX records sorted by priority (empty unless FOUND)
        error: Message of the DNS error, if any
    """
    domain: str
    status: LookupStatus
    records: Tuple[MXRecord, ...] = ()
    error: Optional[str] = None

    @property
    def reachable(self) -> bool:
        """Only a lookup that returned records counts as reachable."""
        return self.status is LookupStatus.FOUND

    @property
    def is_classified_failure(self) -> bool:
        return self.status in CLASSIFIED_FAILURES


class DNSServiceBase(ABC):
    """
    Abstract base class for DNS services.

    Subclasses supply the raw MX query. Classification of the outcome is
    shared so that every service maps DNS errors the same way.
    """

    @abstractmethod
    async def get_mx_records(self, domain: str) -> List[MXRecord]:
        """
        Get all MX records for a domain.

        Args:
            domain: The domain to query

        Returns:
            List of MXRecord objects

        Raises:
            dns.exception.DNSException: If the query fails
        """

    async def lookup_mx(self, domain: str) -> MXLookupResult:
        """
        Look up MX records once and classify the outcome.

        Never raises for DNS or network errors; unexpected errors are
        reported as LookupStatus.ERROR.

        Args:
            domain: The domain to check

        Returns:
            MXLookupResult describing the outcome
        """
        logger.debug("Resolving MX for %s", domain)
        try:
            records = await self.get_mx_records(domain)
        except dns.resolver.NXDOMAIN as exc:
            return self._failure(domain, LookupStatus.NOT_FOUND, exc)
        except dns.resolver.NoAnswer as exc:
            return self._failure(domain, LookupStatus.NO_DATA, exc)
        except dns.resolver.NoNameservers as exc:
            return self._failure(domain, LookupStatus.SERVER_FAILURE, exc)
        except (dns.exception.Timeout, asyncio.TimeoutError) as exc:
            return self._failure(domain, LookupStatus.TIMEOUT, exc)
        except Exception as exc:
            logger.warning("Unexpected DNS error for %s: %s", domain, exc)
            return MXLookupResult(domain=domain, status=LookupStatus.ERROR, error=str(exc))

        if not records:
            logger.info("MX lookup returned no records for %s", domain)
            return MXLookupResult(domain=domain, status=LookupStatus.EMPTY)

        return MXLookupResult(
            domain=domain,
            status=LookupStatus.FOUND,
            records=tuple(sorted(records, key=lambda r: r.priority)),
        )

    async def check_mx_record(self, domain: str) -> bool:
        """
        Check if MX record exists for a domain.

        Args:
            domain: The domain to check

        Returns:
            True if at least one MX record exists, False otherwise
        """
        result = await self.lookup_mx(domain)
        return result.reachable

    @staticmethod
    def _failure(domain: str, status: LookupStatus, exc: Exception) -> MXLookupResult:
        logger.info("MX lookup for %s failed (%s): %s", domain, status.value, exc)
        return MXLookupResult(domain=domain, status=status, error=str(exc))


class DNSService(DNSServiceBase):
    """
    Real DNS service that performs actual DNS lookups.

    Uses dnspython's asyncio resolver. A single query is made per lookup;
    the timeout bounds the whole query including resolver retries.

    The resolver is built on the first lookup and reused afterwards, so a
    missing system resolver configuration surfaces as a failed lookup.
    """

    def __init__(self, timeout: float = 5.0, nameservers: Optional[Sequence[str]] = None):
        """
        Initialize the DNS service.

        Args:
            timeout: DNS query timeout in seconds
            nameservers: Optional nameserver addresses overriding the system ones
        """
        self.timeout = timeout
        self.nameservers = list(nameservers) if nameservers else None
        self._resolver = None

    def _get_resolver(self) -> dns.asyncresolver.Resolver:
        if self._resolver is None:
            # System configuration is only read when no nameservers are given
            resolver = dns.asyncresolver.Resolver(configure=self.nameservers is None)
            resolver.timeout = self.timeout
            resolver.lifetime = self.timeout
            if self.nameservers:
                resolver.nameservers = self.nameservers
            self._resolver = resolver
        return self._resolver

    async def get_mx_records(self, domain: str) -> List[MXRecord]:
        answers = await self._get_resolver().resolve(domain, 'MX')
        records = [
            MXRecord(exchange=str(rdata.exchange).rstrip('.'), priority=rdata.preference)
            for rdata in answers
        ]
        return sorted(records, key=lambda r: r.priority)


class MockDNSService(DNSServiceBase):
    """
    Mock DNS service for testing purposes.

    Allows configuring predefined responses for specific domains.
    """

    def __init__(self, responses: Optional[Dict[str, object]] = None):
        """
        Initialize the mock DNS service.

        Args:
            responses: Dictionary mapping domains to a response, one of:
                      - a list of MXRecord or (priority, host) tuples
                      - True / False as shorthand for one record / no records
                      - an exception instance to raise
                      e.g., {'gmail.com': True, 'invalid.fake': dns.resolver.NXDOMAIN()}
        """
        self.responses = dict(responses or {})
        self.call_history = []

    def set_response(self, domain: str, response):
        """
        Set the response for a specific domain.

        Args:
            domain: The domain to configure
            response: Records, a boolean or an exception instance
        """
        self.responses[domain] = response

    async def get_mx_records(self, domain: str) -> List[MXRecord]:
        """
        Get MX records for a domain (mocked).

        Unconfigured domains behave like NXDOMAIN.
        """
        self.call_history.append(('get_mx_records', domain))

        if domain not in self.responses:
            raise dns.resolver.NXDOMAIN()

        response = self.responses[domain]
        if isinstance(response, BaseException):
            raise response
        if response is True:
            return [MXRecord(exchange=f'mail.{domain}', priority=10)]
        if response is False:
            return []

        records = []
        for entry in response:
            if isinstance(entry, MXRecord):
                records.append(entry)
            else:
                priority, host = entry
                records.append(MXRecord(exchange=host, priority=priority))
        return records

    def reset_history(self):
        """Reset the call history."""
        self.call_history = []
