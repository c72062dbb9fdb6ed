"""
Choose which request headers are covered by the signature.

"""

# Licensed under the MIT License:
# http://opensource.org/licenses/MIT


from collections import OrderedDict

from .encoding import comma_separated_set, trim_and_squeeze


HOST = 'host'
CONTENT_TYPE = 'content-type'
X_AMZ = 'x-amz-'
X_AMZ_DATE = 'x-amz-date'
X_AMZ_CONTENT_SHA256 = 'x-amz-content-sha256'
X_AMZ_SECURITY_TOKEN = 'x-amz-security-token'
AUTHORIZATION = 'authorization'

# Names starting with this are synthetic headers internal to the proxy
INTERNAL_PREFIX = '@'

DEFAULT_INCLUDE_HEADERS = frozenset()
# Proxies rewrite these in transit
DEFAULT_EXCLUDE_HEADERS = frozenset(['x-forwarded-for', 'forwarded', 'via'])
# Values never written to logs
SENSITIVE_HEADERS = frozenset([X_AMZ_SECURITY_TOKEN, AUTHORIZATION])


def is_mandatory(name):
    """
    True if the lower-cased header name must always be signed: host,
    content-type and any x-amz-* header.

    """
    return name == HOST or name == CONTENT_TYPE or name.startswith(X_AMZ)


class HeaderPolicy:
    """
    Which optional headers to sign.

    If include is non-empty only the included headers (plus the mandatory
    ones) are signed, otherwise every header is signed except those in
    exclude. A header listed in both is not signed. Empty sets fall back to
    DEFAULT_INCLUDE_HEADERS and DEFAULT_EXCLUDE_HEADERS.

    Attributes:
    include -- frozenset of lower-case header names
    exclude -- frozenset of lower-case header names

    """

    __slots__ = ('_include', '_exclude')

    def __init__(self, include=None, exclude=None):
        if isinstance(include, (str, bytes)) or \
                isinstance(exclude, (str, bytes)):
            raise TypeError('include and exclude must be iterables of header '
                            'names, use from_strings() for comma separated '
                            'lists')
        include = frozenset(x.lower() for x in include or ())
        exclude = frozenset(x.lower() for x in exclude or ())
        object.__setattr__(self, '_include',
                           include or DEFAULT_INCLUDE_HEADERS)
        object.__setattr__(self, '_exclude',
                           exclude or DEFAULT_EXCLUDE_HEADERS)

    def __setattr__(self, name, value):
        raise AttributeError('HeaderPolicy is read-only')

    @property
    def include(self):
        return self._include

    @property
    def exclude(self):
        return self._exclude

    @classmethod
    def from_strings(cls, include=None, exclude=None):
        """
        Build a policy from comma separated lists of header names, as found
        in configuration files.

        """
        return cls(comma_separated_set(include), comma_separated_set(exclude))

    def is_signed(self, name):
        """
        Decide whether the lower-cased header name is signed under this
        policy.

        """
        if is_mandatory(name):
            return True
        if name.startswith(INTERNAL_PREFIX):
            return False
        if name in self.exclude:
            return False
        if self.include:
            return name in self.include
        return True

    def __eq__(self, other):
        if not isinstance(other, HeaderPolicy):
            return NotImplemented
        return (self.include, self.exclude) == (other.include, other.exclude)

    def __hash__(self):
        return hash((self.include, self.exclude))

    def __repr__(self):
        return 'HeaderPolicy(include={!r}, exclude={!r})'.format(
            sorted(self.include), sorted(self.exclude))


DEFAULT_HEADER_POLICY = HeaderPolicy()


def select_headers(headers, policy=None):
    """
    Select and fold the headers to sign.

    Return an OrderedDict of lower-case header name to canonical value,
    sorted by name. Each value is trimmed and has inner whitespace squeezed;
    values of a header appearing more than once are joined with ',' in the
    order they were received.

    headers -- iterable of (name, value) pairs
    policy  -- HeaderPolicy, DEFAULT_HEADER_POLICY if omitted

    """
    policy = policy or DEFAULT_HEADER_POLICY
    selected = {}
    for name, value in headers:
        if not name:
            continue
        name = name.lower()
        if not policy.is_signed(name):
            continue
        selected.setdefault(name, []).append(trim_and_squeeze(value))
    return OrderedDict((name, ','.join(selected[name]))
                       for name in sorted(selected))
