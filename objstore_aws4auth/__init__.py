"""
Amazon Web Services version 4 request signing for S3 and S3-compatible
object storage, with authentication classes for Requests_ and HTTPX.

.. _Requests: https://github.com/psf/requests

Features
--------
* Bit-exact AWS Signature Version 4 Authorization headers for S3 requests
* Region worked out from the endpoint host name through a configurable table
* Configurable include/exclude lists of optional headers to sign
* Signing of requests read through a small accessor interface, so the
  signer can be driven from a proxy's own request objects
* Credential store mapping a request key to bucket, endpoint, region and
  key pair

Installation
------------
Install via pip:

.. code-block:: bash

    $ pip install objstore-aws4auth

For HTTPX support install the ``httpx`` extra.

Basic usage
-----------
.. code-block:: python

    >>> import requests
    >>> from objstore_aws4auth import AWS4Auth
    >>> auth = AWS4Auth('<ACCESS ID>', '<SECRET KEY>')
    >>> endpoint = 'https://examplebucket.s3.eu-west-1.amazonaws.com/key.txt'
    >>> response = requests.get(endpoint, auth=auth)

The region (``eu-west-1`` here) comes from the host name. Unknown hosts sign
for ``us-east-1`` unless a ``region`` or ``region_map`` is given.

``AwsAuthV4`` objects
---------------------
The signer itself works on any ``RequestView``:

.. code-block:: python

    >>> from objstore_aws4auth import (AwsAuthV4, Credentials, SigningContext,
    ...                                SimpleRequest)
    >>> req = SimpleRequest('GET', 'examplebucket.s3.amazonaws.com',
    ...                     '/test.txt', headers={...})
    >>> signer = AwsAuthV4(req, Credentials(access_id, secret_key),
    ...                    SigningContext(sign_payload=True))
    >>> result = signer.sign()
    >>> result.ok, result.authorization

``sign()`` reports failure in its result rather than raising;
``get_authorization_header()`` raises ``SigningError`` instead. A request
that failed to sign must not be forwarded.

Header selection
----------------
``host``, ``content-type`` and all ``x-amz-*`` headers are always signed.
Headers whose name starts with ``@`` are never signed. Of the rest, only
those in ``include`` are signed if it is non-empty, otherwise all except
those in ``exclude`` (by default ``x-forwarded-for``, ``forwarded`` and
``via``).

Multi-threading / processing
----------------------------
Signing is a pure computation over read-only data. ``AWS4Auth``,
``HeaderPolicy``, ``Credentials`` and region maps can be shared across
threads. Build a new ``SigningContext`` for every request.

Unsupported features
--------------------
* Signing of non-empty payloads (use ``UNSIGNED-PAYLOAD``, the default)
* Chunked uploads

"""

# Licensed under the MIT License:
# http://opensource.org/licenses/MIT


from .aws4auth import AWS4Auth, PreparedRequestView
from .aws4signingkey import AWS4SigningKey
from .canonical import UNSIGNED_PAYLOAD
from .credentials import Credentials, CredentialRecord, CredentialStore
from .exceptions import (AWS4AuthError, RegionMapError, SigningError,
                         UnsignableRequestError)
from .headers import HeaderPolicy
from .region import DEFAULT_REGION_MAP, get_region
from .request import RequestView, SimpleRequest
from .signer import AwsAuthV4, SigningContext, SigningResult

__version__ = '1.0.0'
