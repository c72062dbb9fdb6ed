"""
Build the AWS4 canonical request and its SHA-256 hash.

See http://docs.aws.amazon.com/AmazonS3/latest/API/sig-v4-header-based-auth.html

"""

# Licensed under the MIT License:
# http://opensource.org/licenses/MIT


import hashlib
import logging

from .encoding import canonical_encode
from .headers import SENSITIVE_HEADERS, select_headers


log = logging.getLogger(__name__)

UNSIGNED_PAYLOAD = 'UNSIGNED-PAYLOAD'
EMPTY_PAYLOAD_SHA256 = hashlib.sha256(b'').hexdigest()


def payload_hash(sign_payload):
    """
    Return the payload hash for the canonical request.

    Only empty payloads can be signed, so this is either the SHA-256 of the
    empty string or UNSIGNED-PAYLOAD.

    """
    return EMPTY_PAYLOAD_SHA256 if sign_payload else UNSIGNED_PAYLOAD


def get_canonical_uri(path, params=''):
    """
    Return the canonical URI: path with any params appended after ';',
    encoded as an object name.

    """
    if not path.startswith('/'):
        path = '/' + path
    if params:
        path = ';'.join((path, params))
    return canonical_encode(path, True)


def get_canonical_query_string(query):
    """
    Return the canonical form of a raw query string.

    Each key and value is encoded separately, then the pairs are sorted by
    key and value. A segment without '=' is a key with an empty value; empty
    segments are dropped.

    >>> get_canonical_query_string('b=2&a=1&c')
    'a=1&b=2&c='

    """
    items = set()
    for segment in query.split('&'):
        if not segment:
            continue
        name, _, value = segment.partition('=')
        items.add((canonical_encode(name, False),
                   canonical_encode(value, False)))
    return '&'.join('='.join(item) for item in sorted(items))


def get_canonical_headers(headers, policy=None):
    """
    Return the Canonical Headers and Signed Headers strs as a tuple
    (canonical_headers, signed_headers).

    canonical_headers has one 'name:value' line per signed header, each
    ending with a newline. signed_headers is the ';' joined list of names.

    headers -- iterable of (name, value) pairs
    policy  -- HeaderPolicy

    """
    selected = select_headers(headers, policy)
    cano_headers = ''.join('{}:{}\n'.format(name, value)
                           for name, value in selected.items())
    return cano_headers, ';'.join(selected)


def _canonical_request_parts(request, sign_payload, policy):
    cano_headers, signed_headers = get_canonical_headers(request.headers(),
                                                         policy)
    parts = [request.method(),
             get_canonical_uri(request.path(), request.params()),
             get_canonical_query_string(request.query()),
             cano_headers,
             signed_headers,
             payload_hash(sign_payload)]
    return parts, signed_headers


def get_canonical_request(request, sign_payload=False, policy=None):
    """
    Return the Canonical Request string for request, a RequestView.

    These are the exact bytes hashed by get_canonical_request_hash().

    """
    parts, _ = _canonical_request_parts(request, sign_payload, policy)
    return '\n'.join(parts)


def get_canonical_request_hash(request, sign_payload=False, policy=None):
    """
    Hash the Canonical Request for request.

    Return a tuple (canonical_request_hash, signed_headers), the hash as
    lower-case hex.

    request      -- RequestView
    sign_payload -- sign the (empty) payload instead of UNSIGNED-PAYLOAD
    policy       -- HeaderPolicy selecting the optional headers to sign

    """
    parts, signed_headers = _canonical_request_parts(request, sign_payload,
                                                     policy)
    hsh = hashlib.sha256()
    for part in parts[:-1]:
        hsh.update(part.encode('utf-8'))
        hsh.update(b'\n')
    # no newline after the payload hash
    hsh.update(parts[-1].encode('utf-8'))
    if log.isEnabledFor(logging.DEBUG):
        logged = parts[:3] + [_mask_headers(parts[3])] + parts[4:]
        log.debug('canonical request:\n%s', '\n'.join(logged))
    return hsh.hexdigest(), signed_headers


def _mask_headers(cano_headers):
    lines = cano_headers.split('\n')
    for idx, line in enumerate(lines):
        name = line.partition(':')[0]
        if name in SENSITIVE_HEADERS:
            lines[idx] = name + ':***'
    return '\n'.join(lines)
