"""
AWS4 authentication for HTTPX. Needs the httpx extra:

    $ pip install objstore-aws4auth[httpx]

"""

# Licensed under the MIT License:
# http://opensource.org/licenses/MIT


import httpx

from .aws4auth import AWS4Auth
from .exceptions import UnsignableRequestError
from .headers import (AUTHORIZATION, X_AMZ_CONTENT_SHA256, X_AMZ_DATE,
                      X_AMZ_SECURITY_TOKEN)
from .request import RequestView, split_url
from .signer import AwsAuthV4


class HttpxRequestView(RequestView):
    """
    RequestView over an httpx.Request. Any Authorization header is left out,
    as it is replaced once the request is signed.

    """

    def __init__(self, request):
        self.request = request
        self.url = split_url(str(request.url))

    def method(self):
        return self.request.method.upper()

    def host(self):
        return self.url['host']

    def path(self):
        return self.url['path']

    def params(self):
        return self.url['params']

    def query(self):
        return self.url['query']

    def headers(self):
        return ((hdr, val) for hdr, val in self.request.headers.multi_items()
                if hdr.lower() != AUTHORIZATION)


class HttpxAWS4Auth(AWS4Auth, httpx.Auth):
    """
    HTTPX authentication class, taking the same arguments as AWS4Auth.

    >>> auth = HttpxAWS4Auth('<ACCESS ID>', '<SECRET KEY>')
    >>> httpx.get('https://examplebucket.s3.amazonaws.com/key.txt', auth=auth)

    """

    def auth_flow(self, request):
        if self.sign_payload and request_has_body(request):
            raise UnsignableRequestError('payload signing is only supported '
                                         'for requests without a body')
        context = self.make_context(request.headers.get(X_AMZ_DATE))
        request.headers[X_AMZ_DATE] = context.timestamp
        request.headers[X_AMZ_CONTENT_SHA256] = context.payload_hash
        if self.credentials.session_token:
            request.headers[X_AMZ_SECURITY_TOKEN] = \
                self.credentials.session_token
        signer = AwsAuthV4(HttpxRequestView(request), self.credentials,
                           context, self.policy, self.region_map, self.region)
        request.headers['Authorization'] = signer.get_authorization_header()
        yield request


def request_has_body(request):
    if 'transfer-encoding' in request.headers:
        return True
    return int(request.headers.get('content-length') or 0) > 0
