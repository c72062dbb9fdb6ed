"""
Credentials and the credential store that maps a request key to the bucket,
endpoint, region and key pair used to sign requests for it.

"""

# Licensed under the MIT License:
# http://opensource.org/licenses/MIT


import logging
from collections import namedtuple

import yaml


log = logging.getLogger(__name__)


def to_bytes(value):
    """Encode str to UTF-8, pass bytes through."""
    if isinstance(value, str):
        return value.encode('utf-8')
    return bytes(value)


class Credentials:
    """
    AWS access key ID and secret access key, with an optional session token
    for temporary credentials.

    The secret and token are kept out of repr() and str().

    Attributes:
    access_key_id     -- str
    secret_access_key -- bytes
    session_token     -- str or None

    """

    __slots__ = ('_access_key_id', '_secret_access_key', '_session_token')

    def __init__(self, access_key_id, secret_access_key, session_token=None):
        if isinstance(access_key_id, bytes):
            access_key_id = access_key_id.decode('utf-8')
        object.__setattr__(self, '_access_key_id', access_key_id)
        object.__setattr__(self, '_secret_access_key',
                           to_bytes(secret_access_key))
        object.__setattr__(self, '_session_token', session_token)

    def __setattr__(self, name, value):
        raise AttributeError('Credentials are read-only')

    @property
    def access_key_id(self):
        return self._access_key_id

    @property
    def secret_access_key(self):
        return self._secret_access_key

    @property
    def session_token(self):
        return self._session_token

    def __repr__(self):
        return 'Credentials(access_key_id={!r}, secret_access_key=***{})'.format(
            self._access_key_id,
            ', session_token=***' if self._session_token else '')

    __str__ = __repr__


class CredentialRecord(namedtuple('CredentialRecord',
                                  ['bucket', 'endpoint', 'region',
                                   'access_key_id', 'secret_access_key'])):
    """
    One entry of the credential store.

    The serialised form is the five fields separated by tabs, in field order.

    """

    __slots__ = ()

    @classmethod
    def parse(cls, text):
        """
        Parse a tab separated record. Raise ValueError if it doesn't have
        exactly five fields.

        """
        fields = text.split('\t')
        if len(fields) != len(cls._fields):
            raise ValueError('credential record has {} fields, expected '
                             '{}'.format(len(fields), len(cls._fields)))
        return cls(*fields)

    def serialise(self):
        return '\t'.join(self)

    @property
    def credentials(self):
        return Credentials(self.access_key_id, self.secret_access_key)

    def __repr__(self):
        return ('CredentialRecord(bucket={!r}, endpoint={!r}, region={!r}, '
                'access_key_id={!r}, secret_access_key=***)').format(
                    self.bucket, self.endpoint, self.region,
                    self.access_key_id)


class CredentialStore:
    """
    Read-only lookup of CredentialRecords by an opaque request key.

    >>> store = CredentialStore.from_config({'credentials': [
    ...     {'key': 'media', 'bucket': 'media-bucket',
    ...      'endpoint': 's3.eu-west-1.amazonaws.com', 'region': 'eu-west-1',
    ...      'access_key': 'AKID', 'secret_key': 'SECRET'}]})
    >>> store.lookup('media').region
    'eu-west-1'

    """

    config_fields = (('bucket', 'bucket'),
                     ('endpoint', 'endpoint'),
                     ('region', 'region'),
                     ('access_key', 'access_key_id'),
                     ('secret_key', 'secret_access_key'))

    def __init__(self, records=None):
        self._records = dict(records or {})

    @classmethod
    def from_config(cls, config):
        """
        Build a store from a mapping with a 'credentials' list. Each item
        needs key, access_key, secret_key, bucket, endpoint and region.

        Raise ValueError naming the first missing field.

        """
        required = ['key'] + [src for src, _ in cls.config_fields]
        records = {}
        for idx, item in enumerate(config.get('credentials') or []):
            missing = [name for name in required if name not in item]
            if missing:
                raise ValueError('credentials entry {} is missing '
                                 '{!r}'.format(idx, missing[0]))
            fields = {dst: str(item[src]) for src, dst in cls.config_fields}
            records[str(item['key'])] = CredentialRecord(**fields)
        log.debug('loaded %d credential records', len(records))
        return cls(records)

    @classmethod
    def from_yaml(cls, path):
        """
        Load a store from a YAML file laid out as for from_config(). Other
        top-level keys in the file are ignored.

        """
        with open(path, encoding='utf-8') as f:
            return cls.from_config(yaml.safe_load(f) or {})

    @classmethod
    def from_records(cls, items):
        """
        Build a store from (key, serialised record) pairs, as written by
        CredentialRecord.serialise().

        """
        return cls((key, CredentialRecord.parse(value))
                   for key, value in items)

    def lookup(self, key):
        """Return the CredentialRecord for key, or None if there is none."""
        return self._records.get(key)

    def __contains__(self, key):
        return key in self._records

    def __len__(self):
        return len(self._records)
