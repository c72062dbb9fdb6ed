import os
import io
import codecs
import re
from setuptools import setup


def read(*names):
    with io.open(
        os.path.join(os.path.dirname(__file__), *names),
        encoding='utf-8'
    ) as f:
        return f.read()


def find_version(*file_paths):
    version_file = read(*file_paths)
    version_match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]",
                              version_file, re.M)
    if version_match:
        return version_match.group(1)
    raise RuntimeError('Unable to find version string.')


with codecs.open('README.md', 'r', 'utf-8') as f:
    readme = f.read()
with codecs.open('HISTORY.md', 'r', 'utf-8') as f:
    history = f.read()


version = find_version('objstore_aws4auth', '__init__.py')


setup(
    name='objstore-aws4auth',
    version=version,
    description='AWS4 request signing for S3-compatible object storage',
    long_description=readme + '\n\n' + history,
    long_description_content_type='text/markdown',
    license='MIT License',
    keywords='authentication amazon web services aws s3 sigv4 object storage',
    install_requires=['requests', 'PyYAML'],
    extras_require={
        'httpx': ['httpx'],
        'test': ['httpx', 'pytest'],
    },
    packages=['objstore_aws4auth'],
    python_requires=">=3.8",
    classifiers=[
        'Development Status :: 5 - Production/Stable',
        'Intended Audience :: Developers',
        'Natural Language :: English',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.8',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Internet :: WWW/HTTP'])
