"""
Provides AWS4Auth class for signing requests to S3-compatible object
storage with the Requests module.

"""

# Licensed under the MIT License:
# http://opensource.org/licenses/MIT


from requests.auth import AuthBase

from .credentials import Credentials
from .exceptions import UnsignableRequestError
from .headers import (AUTHORIZATION, HeaderPolicy, X_AMZ_CONTENT_SHA256,
                      X_AMZ_DATE, X_AMZ_SECURITY_TOKEN)
from .region import check_region_map
from .request import RequestView, split_url, to_str
from .signer import DEFAULT_SERVICE, AwsAuthV4, SigningContext


class PreparedRequestView(RequestView):
    """
    RequestView over a Requests PreparedRequest.

    Requests doesn't put a Host header in a PreparedRequest, so one is
    supplied from the URL if missing. An Authorization header left from an
    earlier signing is replaced afterwards, so it is not offered for signing.

    """

    def __init__(self, req):
        self.req = req
        self.url = split_url(req.url)

    def method(self):
        return self.req.method.upper()

    def host(self):
        return self.url['host']

    def path(self):
        return self.url['path']

    def params(self):
        return self.url['params']

    def query(self):
        return self.url['query']

    def headers(self):
        headers = [(to_str(hdr), to_str(val))
                   for hdr, val in self.req.headers.items()
                   if to_str(hdr).lower() != AUTHORIZATION]
        if 'host' not in self.req.headers:
            headers.insert(0, ('host', self.url['netloc']))
        return iter(headers)


def has_body(body):
    return body is not None and body != b'' and body != ''


class AWS4Auth(AuthBase):
    """
    Requests authentication class for providing AWS version 4 authentication
    for requests to S3 and S3-compatible object storage.

    A new timestamp is taken for every request, so instances can be reused
    to sign as many requests as you need.

    Basic usage
    -----------

    >>> import requests
    >>> from objstore_aws4auth import AWS4Auth
    >>> auth = AWS4Auth('<ACCESS ID>', '<SECRET KEY>')
    >>> endpoint = 'https://examplebucket.s3.eu-west-1.amazonaws.com/key.txt'
    >>> response = requests.get(endpoint, auth=auth)

    The region is worked out from the endpoint host name.

    Class attributes
    ----------------

    AWS4Auth.credentials  -- Credentials used to sign
    AWS4Auth.service      -- service name for the credential scope
    AWS4Auth.sign_payload -- sign the empty payload hash instead of
                             UNSIGNED-PAYLOAD
    AWS4Auth.policy       -- HeaderPolicy selecting optional signed headers
    AWS4Auth.region_map   -- host suffix to region mapping
    AWS4Auth.region       -- region override, or None

    """

    def __init__(self, *args, **kwargs):
        """
        AWS4Auth instances can be created from an access ID and secret key,
        or from a Credentials instance:

        >>> auth = AWS4Auth(access_id, secret_key)

          or

        >>> auth = AWS4Auth(credentials)

        Keyword arguments:
        service       -- service name, defaults to 's3'
        sign_payload  -- if True the (empty) payload is signed, requests with
                         a body are then refused. Defaults to False.
        include_hdrs  -- iterable of optional header names to sign
        exclude_hdrs  -- iterable of header names never to sign
        region_map    -- host suffix to region mapping with a '' default
        region        -- sign for this region instead of looking up the host
        session_token -- session token for temporary credentials

        """
        l = len(args)
        if l not in [1, 2]:
            msg = 'AWS4Auth() takes 1 or 2 arguments, {} given'.format(l)
            raise TypeError(msg)
        if l == 1:
            if not isinstance(args[0], Credentials):
                raise TypeError('AWS4Auth() single argument must be '
                                'Credentials')
            self.credentials = args[0]
        else:
            self.credentials = Credentials(args[0], args[1],
                                           kwargs.get('session_token'))
        self.service = kwargs.get('service') or DEFAULT_SERVICE
        self.sign_payload = bool(kwargs.get('sign_payload', False))
        self.policy = HeaderPolicy(kwargs.get('include_hdrs'),
                                   kwargs.get('exclude_hdrs'))
        self.region_map = check_region_map(kwargs.get('region_map'))
        self.region = kwargs.get('region')
        AuthBase.__init__(self)

    def __call__(self, req):
        """
        Interface used by Requests module to apply authentication to HTTP
        requests.

        Add x-amz-content-sha256 and Authorization headers to the request,
        and x-amz-security-token when using temporary credentials. Add an
        x-amz-date header if not already present.

        req -- Requests PreparedRequest object

        """
        if self.sign_payload and has_body(req.body):
            raise UnsignableRequestError('payload signing is only supported '
                                         'for requests without a body')
        context = self.make_context(req.headers.get(X_AMZ_DATE))
        req.headers[X_AMZ_DATE] = context.timestamp
        req.headers[X_AMZ_CONTENT_SHA256] = context.payload_hash
        if self.credentials.session_token:
            req.headers[X_AMZ_SECURITY_TOKEN] = self.credentials.session_token
        signer = AwsAuthV4(PreparedRequestView(req), self.credentials,
                           context, self.policy, self.region_map, self.region)
        req.headers['Authorization'] = signer.get_authorization_header()
        return req

    def make_context(self, amz_date=None):
        """
        Return a SigningContext for one request, reusing amz_date if the
        request already carries one.

        """
        return SigningContext(to_str(amz_date), self.sign_payload,
                              self.service)
