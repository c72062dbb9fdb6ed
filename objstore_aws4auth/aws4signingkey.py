"""
Provides AWS4SigningKey class for deriving Amazon Web Services
authentication version 4 signing keys.

"""

# Licensed under the MIT License:
# http://opensource.org/licenses/MIT


import hmac
import hashlib

from .credentials import to_bytes


class AWS4SigningKey:
    """
    AWS signing key. Used to sign AWS authentication strings.

    The secret access key is not stored in the object after instantiation.

    Methods:
    generate_key() -- Generate AWS4 Signing Key bytes.
    sign_sha256()  -- Generate SHA256 HMAC signature, encoding message to bytes
                      if required.

    Attributes:
    region   -- AWS region the key is scoped for
    service  -- AWS service the key is scoped for
    date     -- 8-digit date (YYYYMMDD) the key is scoped for
    scope    -- The AWS scope string for this key, calculated from the above
                attributes.
    key      -- The signing key itself, bytes

    """

    def __init__(self, secret_key, region, service, date):
        """
        >>> AWS4SigningKey(secret_key, region, service, date)

        secret_key -- AWS secret access key, str or bytes
        region     -- region the key is scoped for, e.g. us-east-1
        service    -- service the key is scoped for, e.g. s3
        date       -- 8-digit date of the form YYYYMMDD. Signing keys are
                      valid for 7 days from this date.

        """
        self.region = region
        self.service = service
        self.date = date
        self.scope = '{}/{}/{}/aws4_request'.format(self.date,
                                                    self.region,
                                                    self.service)
        self.key = self.generate_key(secret_key, self.region,
                                     self.service, self.date)

    @classmethod
    def generate_key(cls, secret_key, region, service, date,
                     intermediate=False):
        """
        Generate the signing key as bytes.

        If intermediate is set to True, returns a 4-tuple containing the key
        and the intermediate keys:

        ( signing_key, date_key, region_key, service_key )

        The intermediate keys can be used for testing against examples from
        Amazon.

        The 'AWS4' + secret key buffer is overwritten with zeros once the
        date key has been derived.

        """
        init_key = bytearray(b'AWS4')
        init_key.extend(to_bytes(secret_key))
        try:
            date_key = cls.sign_sha256(init_key, date)
        finally:
            init_key[:] = bytes(len(init_key))
        region_key = cls.sign_sha256(date_key, region)
        service_key = cls.sign_sha256(region_key, service)
        key = cls.sign_sha256(service_key, 'aws4_request')
        if intermediate:
            return (key, date_key, region_key, service_key)
        else:
            return key

    @staticmethod
    def sign_sha256(key, msg):
        """
        Generate an SHA256 HMAC, encoding msg to UTF-8 if not
        already encoded.

        key -- signing key. bytes or bytearray.
        msg -- message to sign. str or bytes.

        """
        if isinstance(msg, str):
            msg = msg.encode('utf-8')
        return hmac.new(key, msg, hashlib.sha256).digest()

    def __repr__(self):
        return '<AWS4SigningKey scope={}>'.format(self.scope)
