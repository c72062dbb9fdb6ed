"""
String encoding helpers used to build AWS4 canonical requests.

All functions here are total: they accept any text and never raise.

"""

# Licensed under the MIT License:
# http://opensource.org/licenses/MIT


import re
import binascii


UNRESERVED = frozenset('ABCDEFGHIJKLMNOPQRSTUVWXYZ'
                       'abcdefghijklmnopqrstuvwxyz'
                       '0123456789-_.~')
HEX_DIGITS = frozenset('0123456789abcdefABCDEF')

# C locale isspace(), not str.isspace() which also matches Unicode spaces
WHITESPACE = ' \t\n\v\f\r'
_whitespace_run = re.compile('[ \t\n\v\f\r]+')


def uri_encode(text, is_object_name):
    """
    URI-encode text the way AWS4 auth requires.

    Every byte of the UTF-8 encoded text except the unreserved characters
    A-Z a-z 0-9 - _ . ~ is percent-encoded with upper-case hex digits. Both a
    space and a plus sign encode to %20. A forward slash is left as it is
    when is_object_name is true.

    text           -- str to encode
    is_object_name -- True when text is an object key (path), False for
                      query string keys and values

    """
    out = []
    for byte in bytearray(text.encode('utf-8')):
        char = chr(byte)
        if char in UNRESERVED:
            out.append(char)
        elif char == ' ' or char == '+':
            # AWS treats '+' as a space wherever it appears
            out.append('%20')
        elif char == '/' and is_object_name:
            out.append(char)
        else:
            out.append('%{:02X}'.format(byte))
    return ''.join(out)


def is_uri_encoded(text, is_object_name):
    """
    Guess whether text has already been URI-encoded.

    The scan stops at the first character that decides the matter: a space,
    or a '/' outside an object name, means not encoded; a '%' followed by two
    hex digits means encoded, a lone '%' means not encoded. Text containing
    none of these is reported as not encoded.

    An unencoded string that happens to contain '%' followed by two hex
    digits (e.g. 'a%2b') is reported as encoded. This is kept deliberately:
    the storage service has never confirmed how it treats such names.

    """
    length = len(text)
    for pos, char in enumerate(text):
        if char in UNRESERVED:
            continue
        if char == ' ':
            return False
        if char == '/' and not is_object_name:
            return False
        if char == '%':
            return (pos + 2 < length and
                    text[pos + 1] in HEX_DIGITS and
                    text[pos + 2] in HEX_DIGITS)
    return False


def canonical_encode(text, is_object_name):
    """
    URI-encode text unless it already looks encoded.

    Prevents double encoding of paths and query strings that reach us
    pre-encoded.

    """
    if is_uri_encoded(text, is_object_name):
        return text
    return uri_encode(text, is_object_name)


def trim_whitespace(text):
    """Strip leading and trailing whitespace."""
    return text.strip(WHITESPACE)


def trim_and_squeeze(text):
    """
    Strip leading and trailing whitespace and replace every inner run of
    whitespace with a single space.

    """
    return _whitespace_run.sub(' ', trim_whitespace(text))


def base16_encode(data):
    """Lower-case hex encode bytes, two digits per byte, as str."""
    return binascii.hexlify(data).decode('ascii')


def comma_separated_set(text, trim=True, lower=True):
    """
    Split a comma separated configuration value into a frozenset.

    >>> sorted(comma_separated_set(' Via, X-Forwarded-For ,,'))
    ['via', 'x-forwarded-for']

    text  -- str, may be None or empty
    trim  -- strip whitespace around each item
    lower -- lower-case each item

    """
    items = set()
    for token in (text or '').split(','):
        if trim:
            token = trim_whitespace(token)
        if lower:
            token = token.lower()
        if token:
            items.add(token)
    return frozenset(items)
