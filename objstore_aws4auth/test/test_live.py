#!/usr/bin/env python
# coding: utf-8

"""
Live service tests
------------------
This module contains tests against live S3. In order to run these your AWS
access ID and secret key need to be specified in the AWS_ACCESS_ID and
AWS_ACCESS_KEY environment variables respectively. This can be done with
something like:

$ AWS_ACCESS_ID='ID' AWS_ACCESS_KEY='KEY' python -m pytest test_live.py

If these variables are not provided the tests are skipped. AWS_TEST_BUCKET
and AWS_TEST_BUCKET_REGION name an existing bucket for the object listing
tests.

The live tests perform information retrieval operations only, no chargeable
operations are performed!
"""

import unittest
import os

import requests

from objstore_aws4auth import AWS4Auth

live_access_id = os.getenv('AWS_ACCESS_ID')
live_secret_key = os.getenv('AWS_ACCESS_KEY')
live_bucket = os.getenv('AWS_TEST_BUCKET')
live_bucket_region = os.getenv('AWS_TEST_BUCKET_REGION', 'us-east-1')


@unittest.skipIf(live_access_id is None or live_secret_key is None,
                 'AWS_ACCESS_ID and AWS_ACCESS_KEY environment variables not'
                 ' set, skipping live service tests')
class AWS4Auth_LiveService_Test(unittest.TestCase):

    def _get(self, url, **kwargs):
        auth = AWS4Auth(live_access_id, live_secret_key, **kwargs)
        response = requests.get(url, auth=auth)
        # suppress socket close warnings
        response.connection.close()
        return response

    def test_list_buckets(self):
        response = self._get('https://s3.amazonaws.com/')
        self.assertTrue(response.ok, response.text)

    def test_list_buckets_signed_payload(self):
        response = self._get('https://s3.amazonaws.com/', sign_payload=True)
        self.assertTrue(response.ok, response.text)

    @unittest.skipIf(live_bucket is None, 'AWS_TEST_BUCKET not set')
    def test_list_objects(self):
        url = 'https://{}.s3.{}.amazonaws.com/?list-type=2&max-keys=1'.format(
            live_bucket, live_bucket_region)
        response = self._get(url)
        self.assertTrue(response.ok, response.text)


if __name__ == '__main__':
    unittest.main()
