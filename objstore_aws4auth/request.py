"""
Read-only view of the request being signed.

The signer never touches an HTTP library's request object directly; it reads
everything through a RequestView. Adapters for Requests and HTTPX live in
aws4auth and httpx_auth; SimpleRequest is a plain in-memory implementation.

"""

# Licensed under the MIT License:
# http://opensource.org/licenses/MIT


import abc

from urllib.parse import urlsplit


class RequestView(abc.ABC):
    """
    Accessor for the parts of a request that are covered by the signature.

    path() is the URL path without any ;params (which params() returns, also
    without the ';'). query() is the raw query string without the '?'.
    headers() yields (name, value) str pairs in the order received, names may
    repeat.

    """

    @abc.abstractmethod
    def method(self):
        pass

    @abc.abstractmethod
    def host(self):
        pass

    @abc.abstractmethod
    def path(self):
        pass

    @abc.abstractmethod
    def params(self):
        pass

    @abc.abstractmethod
    def query(self):
        pass

    @abc.abstractmethod
    def headers(self):
        pass


class SimpleRequest(RequestView):
    """
    RequestView over plain values.

    >>> req = SimpleRequest('GET', 'bucket.s3.amazonaws.com', '/key.txt',
    ...                     headers=[('Host', 'bucket.s3.amazonaws.com')])

    headers may be a mapping or an iterable of (name, value) pairs.

    """

    def __init__(self, method, host, path='/', params='', query='',
                 headers=None):
        self._method = method
        self._host = host
        self._path = path
        self._params = params
        self._query = query
        if hasattr(headers, 'items'):
            headers = headers.items()
        self._headers = tuple(headers or ())

    @classmethod
    def from_url(cls, method, url, headers=None):
        """
        Build from an absolute URL, adding a Host header taken from the URL
        if headers don't already have one.

        """
        parts = split_url(url)
        if hasattr(headers, 'items'):
            headers = headers.items()
        headers = list(headers or ())
        if not any(name.lower() == 'host' for name, _ in headers):
            headers.insert(0, ('Host', parts['netloc']))
        return cls(method, parts['host'], parts['path'], parts['params'],
                   parts['query'], headers)

    def method(self):
        return self._method

    def host(self):
        return self._host

    def path(self):
        return self._path

    def params(self):
        return self._params

    def query(self):
        return self._query

    def headers(self):
        return iter(self._headers)


def split_url(url):
    """
    Split url into a dict with netloc, host, path, params and query.

    The query is taken verbatim from after the first '?' since urlsplit
    normalises some unusual query strings differently to AWS. A #fragment is
    never sent, so it is dropped. Only params attached to the last path
    segment are split off, as urlparse does.

    """
    url = url.partition('#')[0]
    before, _, query = url.partition('?')
    parts = urlsplit(before)
    path = parts.path or '/'
    params = ''
    semicolon = path.find(';', path.rfind('/') + 1)
    if semicolon >= 0:
        path, params = path[:semicolon], path[semicolon + 1:]
    return {'netloc': parts.netloc,
            'host': parts.hostname or '',
            'path': path,
            'params': params,
            'query': query}


def to_str(value):
    """Decode a header name or value that an HTTP library kept as bytes."""
    if isinstance(value, bytes):
        return value.decode('latin-1')
    return value
