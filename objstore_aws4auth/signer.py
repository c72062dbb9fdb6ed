"""
Produce the AWS4 Authorization header value for a request.

Signing is a single pass: canonical request hash, string to sign, signing
key, signature. Nothing is cached between requests and no shared state is
modified, so signers can run concurrently.

"""

# Licensed under the MIT License:
# http://opensource.org/licenses/MIT


import re
import logging
from collections import namedtuple
from datetime import datetime, timezone

from .aws4signingkey import AWS4SigningKey
from .canonical import get_canonical_request_hash, payload_hash
from .encoding import base16_encode
from .exceptions import SigningError
from .headers import DEFAULT_HEADER_POLICY
from .region import check_region_map, get_region


log = logging.getLogger(__name__)

ALGORITHM = 'AWS4-HMAC-SHA256'
DEFAULT_SERVICE = 's3'
TIMESTAMP_FORMAT = '%Y%m%dT%H%M%SZ'
_timestamp_re = re.compile(r'^\d{8}T\d{6}Z$')


def format_timestamp(now=None):
    """
    Format now as an ISO 8601 basic timestamp, YYYYMMDDTHHMMSSZ, in UTC.

    now -- datetime (naive values are taken to be UTC), POSIX timestamp, an
           already formatted timestamp str, or None for the current time

    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif isinstance(now, str):
        if not _timestamp_re.match(now):
            raise ValueError('timestamp {!r} is not of the form '
                             'YYYYMMDDTHHMMSSZ'.format(now))
        return now
    elif isinstance(now, datetime):
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        else:
            now = now.astimezone(timezone.utc)
    else:
        now = datetime.fromtimestamp(now, timezone.utc)
    return now.strftime(TIMESTAMP_FORMAT)


class SigningContext:
    """
    Per-request signing parameters.

    The timestamp is captured once, here, so the credential scope date and
    the string to sign always agree. Build a new context for every request:
    AWS rejects signatures whose timestamp is too far from its clock.

    Attributes:
    timestamp    -- YYYYMMDDTHHMMSSZ
    date         -- YYYYMMDD, the first 8 characters of timestamp
    sign_payload -- sign the (empty) payload rather than sending
                    UNSIGNED-PAYLOAD
    service      -- service name for the credential scope

    """

    def __init__(self, now=None, sign_payload=False, service=DEFAULT_SERVICE):
        self.timestamp = format_timestamp(now)
        self.date = self.timestamp[:8]
        self.sign_payload = sign_payload
        self.service = service

    @property
    def payload_hash(self):
        return payload_hash(self.sign_payload)

    def __repr__(self):
        return 'SigningContext({!r}, sign_payload={!r}, service={!r})'.format(
            self.timestamp, self.sign_payload, self.service)


class SigningResult(namedtuple('SigningResult', ['authorization',
                                                 'signed_headers',
                                                 'region',
                                                 'error'])):
    """
    Outcome of AwsAuthV4.sign().

    authorization is the Authorization header value, or None when error
    holds the SigningError that prevented signing.

    """

    __slots__ = ()

    @property
    def ok(self):
        return self.error is None


def get_credential_scope(date, region, service):
    return '{}/{}/{}/aws4_request'.format(date, region, service)


def get_string_to_sign(timestamp, region, service, canonical_request_hash):
    """
    Generate the AWS4 string to sign.

    timestamp              -- YYYYMMDDTHHMMSSZ, its first 8 characters are
                              used for the scope date
    region                 -- region for the credential scope
    service                -- service for the credential scope
    canonical_request_hash -- hex SHA-256 of the canonical request

    """
    scope = get_credential_scope(timestamp[:8], region, service)
    return '\n'.join([ALGORITHM, timestamp, scope, canonical_request_hash])


def get_signature(secret_key, region, service, date, string_to_sign):
    """
    Derive the signing key and sign string_to_sign with it.

    Return the raw signature bytes, or b'' if the HMAC primitive failed. An
    empty result must be treated as a signing failure.

    """
    try:
        key = AWS4SigningKey.generate_key(secret_key, region, service, date)
        return AWS4SigningKey.sign_sha256(key, string_to_sign)
    except (ValueError, MemoryError) as e:
        log.error('HMAC-SHA256 failed deriving the signature for scope %s: '
                  '%s', get_credential_scope(date, region, service),
                  e.__class__.__name__)
        return b''


class AwsAuthV4:
    """
    Signs one request with AWS Signature Version 4.

    >>> signer = AwsAuthV4(request, Credentials(access_id, secret_key),
    ...                    SigningContext(sign_payload=True))
    >>> signer.get_authorization_header()
    'AWS4-HMAC-SHA256 Credential=...,SignedHeaders=...,Signature=...'

    request     -- RequestView for the request to sign
    credentials -- Credentials
    context     -- SigningContext, a new one (current time, unsigned
                   payload, s3) if omitted
    policy      -- HeaderPolicy, DEFAULT_HEADER_POLICY if omitted
    region_map  -- host suffix to region mapping, DEFAULT_REGION_MAP if
                   omitted or empty. Must have a default '' entry.
    region      -- region to sign for, overriding the region map lookup

    """

    def __init__(self, request, credentials, context=None, policy=None,
                 region_map=None, region=None):
        self.request = request
        self.credentials = credentials
        self.context = context or SigningContext()
        self.policy = policy or DEFAULT_HEADER_POLICY
        self.region_map = check_region_map(region_map)
        self.region = region

    def get_date_time(self):
        return self.context.timestamp

    def get_payload_hash(self):
        return self.context.payload_hash

    def get_region(self):
        if self.region:
            return self.region
        return get_region(self.region_map, self.request.host())

    def sign(self):
        """
        Sign the request and return a SigningResult.

        Never raises for a primitive failure; the failure is returned in the
        result's error attribute instead.

        """
        ctx = self.context
        cano_hash, signed_headers = get_canonical_request_hash(
            self.request, ctx.sign_payload, self.policy)
        region = self.get_region()
        string_to_sign = get_string_to_sign(ctx.timestamp, region,
                                            ctx.service, cano_hash)
        log.debug('string to sign:\n%s', string_to_sign)
        signature = get_signature(self.credentials.secret_access_key, region,
                                  ctx.service, ctx.date, string_to_sign)
        scope = get_credential_scope(ctx.date, region, ctx.service)
        if not signature:
            error = SigningError('failed to sign {} request to {} for '
                                 '{}'.format(self.request.method(),
                                             self.request.host(), scope))
            return SigningResult(None, signed_headers, region, error)
        auth_str = '{} '.format(ALGORITHM)
        auth_str += 'Credential={}/{},'.format(
            self.credentials.access_key_id, scope)
        auth_str += 'SignedHeaders={},'.format(signed_headers)
        auth_str += 'Signature={}'.format(base16_encode(signature))
        log.debug('signed %s request to %s, region %s, signed headers %s',
                  self.request.method(), self.request.host(), region,
                  signed_headers)
        return SigningResult(auth_str, signed_headers, region, None)

    def get_authorization_header(self):
        """
        Return the Authorization header value. Raise SigningError if the
        request could not be signed.

        """
        result = self.sign()
        if not result.ok:
            raise result.error
        return result.authorization
