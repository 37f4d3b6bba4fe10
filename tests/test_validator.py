"""
Unit Tests for EmailValidator

Comprehensive tests covering:
- The validate_email_strict entry point and its defaults
- Syntax short-circuiting before any DNS activity
- MX record checking with mocked DNS service
"""

import asyncio

import pytest
from unittest.mock import AsyncMock, patch

import dns.exception
import dns.resolver

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from email_validator_strict.config import ValidatorOptions
from email_validator_strict.dns_service import LookupStatus, MXLookupResult, MXRecord, MockDNSService
from email_validator_strict.syntax import ValidationMode
from email_validator_strict.validator import EmailValidator, ValidationResult, validate_email_strict


MX_RECORDS = [(10, 'mx1.example.com'), (20, 'mx2.example.com')]


def run(coro):
    return asyncio.run(coro)


class TestValidateEmailStrict:
    """Tests for the validate_email_strict coroutine without MX checking."""

    def test_default_options(self):
        assert run(validate_email_strict("test@example.com")) is True

    def test_localhost_depends_on_mode(self):
        assert run(validate_email_strict("test@localhost")) is False
        assert run(validate_email_strict("test@localhost", validation_mode='real-world')) is False
        assert run(validate_email_strict("test@localhost", validation_mode='rfc')) is True

    def test_quoted_local_part_depends_on_mode(self):
        email = '"user name"@example.com'
        assert run(validate_email_strict(email, ValidatorOptions(validation_mode=ValidationMode.RFC))) is True
        assert run(validate_email_strict(email)) is False

    def test_options_object(self):
        options = ValidatorOptions(validation_mode='rfc')
        assert run(validate_email_strict("test@[1.2.3.4]", options)) is True

    def test_keyword_overrides_options(self):
        options = ValidatorOptions(validation_mode='rfc')
        assert run(validate_email_strict("test@localhost", options, validation_mode='real-world')) is False

    def test_trims_input(self):
        assert run(validate_email_strict("  test@example.com\t\n")) is True

    def test_trims_byte_order_mark_and_unicode_spaces(self):
        assert run(validate_email_strict("\ufefftest@example.com\u3000")) is True
        assert run(validate_email_strict("\xa0\u2028", validation_mode='rfc')) is False

    def test_information_separators_are_not_trimmed(self):
        assert run(validate_email_strict("\x1ctest@example.com", validation_mode='rfc')) is False

    @pytest.mark.parametrize("email", ["", " ", "   \t\n"])
    @pytest.mark.parametrize("mode", ['real-world', 'rfc'])
    @pytest.mark.parametrize("check_domain", [False, True])
    def test_empty_or_whitespace(self, email, mode, check_domain):
        dns_service = MockDNSService({'example.com': True})
        result = run(validate_email_strict(
            email, check_domain=check_domain, validation_mode=mode, dns_service=dns_service
        ))
        assert result is False
        assert dns_service.call_history == []

    @pytest.mark.parametrize("value", [None, 123, {}, [], True, b"test@example.com"])
    def test_non_string_raises_type_error(self, value):
        dns_service = MockDNSService({'example.com': True})
        with pytest.raises(TypeError, match="Input must be a string."):
            run(validate_email_strict(value, check_domain=True, dns_service=dns_service))
        assert dns_service.call_history == []

    def test_type_error_before_mode_validation(self):
        with pytest.raises(TypeError):
            run(validate_email_strict(123, validation_mode='bogus'))

    def test_unknown_mode_raises(self):
        with pytest.raises(ValueError):
            run(validate_email_strict("test@example.com", validation_mode='bogus'))

    def test_returns_coroutine_without_lookup(self):
        coro = validate_email_strict("test@example.com")
        assert asyncio.iscoroutine(coro)
        assert run(coro) is True


class TestDomainCheck:
    """Tests for check_domain=True."""

    def setup_method(self):
        self.dns_service = MockDNSService()

    def _validate(self, email, mode='real-world'):
        return run(validate_email_strict(
            email, check_domain=True, validation_mode=mode, dns_service=self.dns_service
        ))

    def test_records_found(self):
        self.dns_service.set_response('example-valid.com', MX_RECORDS)
        assert self._validate("test@example-valid.com") is True
        assert self.dns_service.call_history == [('get_mx_records', 'example-valid.com')]

    @pytest.mark.parametrize("mode", ['real-world', 'rfc'])
    def test_empty_records(self, mode):
        self.dns_service.set_response('example-valid.com', [])
        assert self._validate("test@example-valid.com", mode) is False
        assert self.dns_service.call_history == [('get_mx_records', 'example-valid.com')]

    @pytest.mark.parametrize("error", [
        dns.resolver.NXDOMAIN(),
        dns.resolver.NoAnswer(),
        dns.resolver.NoNameservers(),
        dns.exception.Timeout(),
        RuntimeError('Some other network issue'),
    ])
    @pytest.mark.parametrize("mode", ['real-world', 'rfc'])
    def test_dns_errors(self, error, mode):
        self.dns_service.set_response('example-valid.com', error)
        assert self._validate("test@example-valid.com", mode) is False
        assert self.dns_service.call_history == [('get_mx_records', 'example-valid.com')]

    def test_invalid_syntax_skips_lookup(self):
        assert self._validate("invalid-syntax") is False
        assert self._validate("invalid-syntax", 'rfc') is False
        assert self.dns_service.call_history == []

    def test_rfc_only_syntax_skips_lookup_in_real_world(self):
        self.dns_service.set_response('localhost', MX_RECORDS)
        assert self._validate("test@localhost") is False
        assert self.dns_service.call_history == []

    def test_rfc_only_syntax_checked_in_rfc(self):
        self.dns_service.set_response('localhost', MX_RECORDS)
        assert self._validate("test@localhost", 'rfc') is True
        assert self.dns_service.call_history == [('get_mx_records', 'localhost')]

    def test_domain_from_quoted_local_with_at(self):
        self.dns_service.set_response('example.com', MX_RECORDS)
        assert self._validate('"a@b"@example.com', 'rfc') is True
        assert self.dns_service.call_history == [('get_mx_records', 'example.com')]

    def test_lookup_uses_trimmed_domain(self):
        self.dns_service.set_response('example.com', MX_RECORDS)
        assert self._validate("  test@example.com  ") is True
        assert self.dns_service.call_history == [('get_mx_records', 'example.com')]


class TestEmailValidator:
    """Tests for the EmailValidator class."""

    def test_default_configuration(self):
        validator = EmailValidator()
        assert validator.check_domain is False
        assert validator.validation_mode is ValidationMode.REAL_WORLD
        assert validator.dns_service is None

    def test_mode_from_string(self):
        assert EmailValidator(validation_mode='rfc').validation_mode is ValidationMode.RFC

    def test_from_options(self):
        dns_service = MockDNSService()
        validator = EmailValidator.from_options(
            ValidatorOptions(check_domain=True, validation_mode='rfc'), dns_service=dns_service
        )
        assert validator.check_domain is True
        assert validator.validation_mode is ValidationMode.RFC
        assert validator.dns_service is dns_service

    def test_from_env(self):
        validator = EmailValidator.from_env({
            'EMAIL_VALIDATOR_CHECK_DOMAIN': 'true',
            'EMAIL_VALIDATOR_MODE': 'rfc',
            'EMAIL_VALIDATOR_DNS_TIMEOUT': '2.5',
        })
        assert validator.check_domain is True
        assert validator.validation_mode is ValidationMode.RFC
        assert validator.dns_timeout == 2.5

    def test_check_syntax(self):
        result = EmailValidator(validation_mode='rfc').check_syntax("  test@localhost ")
        assert result.accepted is True
        assert result.domain == "localhost"

    def test_check_syntax_non_string(self):
        with pytest.raises(TypeError):
            EmailValidator().check_syntax(None)

    def test_validate_result_without_mx(self):
        result = run(EmailValidator().validate(" user@example.com "))
        assert result == ValidationResult(
            is_valid=True,
            email="user@example.com",
            validation_mode=ValidationMode.REAL_WORLD,
            domain="example.com",
        )
        assert result.errors == []
        assert result.mx_valid is None
        assert result.mx_status is None

    def test_validate_result_rejected_syntax(self):
        result = run(EmailValidator().validate("user@localhost"))
        assert result.is_valid is False
        assert result.domain is None
        assert result.errors == ["Email does not match the real-world grammar"]

    def test_validate_result_empty(self):
        result = run(EmailValidator().validate("   "))
        assert result.is_valid is False
        assert result.email == ""
        assert result.errors == ["Email address is empty"]

    def test_validate_result_with_mx(self):
        validator = EmailValidator(check_domain=True, dns_service=MockDNSService({'example.com': MX_RECORDS}))
        result = run(validator.validate("user@example.com"))
        assert result.is_valid is True
        assert result.mx_valid is True
        assert result.mx_status is LookupStatus.FOUND
        assert result.errors == []

    @pytest.mark.parametrize("response,status,error", [
        ([], LookupStatus.EMPTY, "No MX records found for domain"),
        (dns.resolver.NXDOMAIN(), LookupStatus.NOT_FOUND, "Domain does not exist"),
        (dns.resolver.NoAnswer(), LookupStatus.NO_DATA, "No MX records found for domain"),
        (dns.resolver.NoNameservers(), LookupStatus.SERVER_FAILURE, "DNS server failure"),
        (dns.exception.Timeout(), LookupStatus.TIMEOUT, "DNS lookup timed out"),
        (RuntimeError('boom'), LookupStatus.ERROR, "DNS lookup failed"),
    ])
    def test_validate_result_mx_failures(self, response, status, error):
        validator = EmailValidator(check_domain=True, dns_service=MockDNSService({'example.com': response}))
        result = run(validator.validate("user@example.com"))
        assert result.is_valid is False
        assert result.mx_valid is False
        assert result.mx_status is status
        assert result.errors == [error]

    def test_to_dict(self):
        validator = EmailValidator(
            check_domain=True, validation_mode='rfc', dns_service=MockDNSService({'localhost': True})
        )
        result = run(validator.validate("test@localhost"))
        assert result.to_dict() == {
            'is_valid': True,
            'email': 'test@localhost',
            'validation_mode': 'rfc',
            'domain': 'localhost',
            'errors': [],
            'mx_valid': True,
            'mx_status': 'found',
        }

    def test_to_dict_without_mx(self):
        result = run(EmailValidator().validate("bad"))
        assert result.to_dict()['mx_status'] is None

    def test_is_valid(self):
        validator = EmailValidator()
        assert run(validator.is_valid("user@example.com")) is True
        assert run(validator.is_valid("invalid")) is False

    def test_validate_batch(self):
        dns_service = MockDNSService({'example.com': True, 'nomx.com': False})
        validator = EmailValidator(check_domain=True, dns_service=dns_service)
        emails = ["a@example.com", "invalid", "b@nomx.com", "c@example.com"]

        results = run(validator.validate_batch(emails))

        assert [r.email for r in results] == emails
        assert [r.is_valid for r in results] == [True, False, False, True]
        assert sorted(dns_service.call_history) == [
            ('get_mx_records', 'example.com'),
            ('get_mx_records', 'example.com'),
            ('get_mx_records', 'nomx.com'),
        ]

    def test_validate_batch_empty(self):
        assert run(EmailValidator().validate_batch([])) == []

    def test_validate_batch_non_string_raises(self):
        with pytest.raises(TypeError):
            run(EmailValidator().validate_batch(["a@example.com", 42]))

    def test_validate_batch_non_string_starts_no_lookup(self):
        dns_service = MockDNSService({'example.com': True})
        validator = EmailValidator(check_domain=True, dns_service=dns_service)

        with pytest.raises(TypeError, match="Input must be a string."):
            run(validator.validate_batch(["a@example.com", "b@example.com", None]))

        assert dns_service.call_history == []

    def test_missing_resolver_configuration_returns_false(self):
        with patch(
            'dns.resolver.BaseResolver.read_resolv_conf',
            side_effect=dns.resolver.NoResolverConfiguration('no nameservers'),
        ):
            assert run(validate_email_strict("test@example.com", check_domain=True)) is False

            result = run(EmailValidator(check_domain=True).validate("test@example.com"))

        assert result.is_valid is False
        assert result.mx_status is LookupStatus.ERROR
        assert result.errors == ["DNS lookup failed"]

    def test_dns_service_created_lazily(self):
        lookup = MXLookupResult(
            domain='example.com',
            status=LookupStatus.FOUND,
            records=(MXRecord(exchange='mx.example.com', priority=10),),
        )
        with patch('email_validator_strict.validator.DNSService') as mock_dns_cls:
            mock_dns_cls.return_value.lookup_mx = AsyncMock(return_value=lookup)
            validator = EmailValidator(check_domain=True, dns_timeout=3.0)

            assert run(validator.is_valid("user@localhost")) is False
            mock_dns_cls.assert_not_called()

            assert run(validator.is_valid("user@example.com")) is True
            assert run(validator.is_valid("other@example.com")) is True

        mock_dns_cls.assert_called_once_with(timeout=3.0)
        assert mock_dns_cls.return_value.lookup_mx.await_count == 2

    def test_no_dns_service_without_domain_check(self):
        with patch('email_validator_strict.validator.DNSService') as mock_dns_cls:
            assert run(EmailValidator().is_valid("user@example.com")) is True
        mock_dns_cls.assert_not_called()


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
