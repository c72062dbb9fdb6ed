"""
Resolve the AWS region a request is signed for from the request host.

"""

# Licensed under the MIT License:
# http://opensource.org/licenses/MIT


from types import MappingProxyType

from .exceptions import RegionMapError


DEFAULT_REGION = 'us-east-1'

_standard_regions = [
    'us-east-1', 'us-east-2', 'us-west-1', 'us-west-2',
    'ap-south-1', 'ap-northeast-1', 'ap-northeast-2', 'ap-northeast-3',
    'ap-southeast-1', 'ap-southeast-2', 'ca-central-1', 'eu-central-1',
    'eu-west-1', 'eu-west-2', 'eu-west-3', 'sa-east-1']


def create_default_region_map():
    """
    Build the default S3 endpoint to region table.

    See http://docs.aws.amazon.com/general/latest/gr/rande.html#s3_region

    Covers the regional, legacy dash-style and dual-stack endpoint names of
    each standard region, the global and external-1 names of us-east-1 and
    the two China regions. The empty suffix maps to us-east-1 and is used
    when nothing else matches.

    """
    regions = {}
    for region in _standard_regions:
        regions['s3.{}.amazonaws.com'.format(region)] = region
        regions['s3-{}.amazonaws.com'.format(region)] = region
        regions['s3.dualstack.{}.amazonaws.com'.format(region)] = region
    # us-east-1 predates regional names, so has no s3-us-east-1 name
    del regions['s3-us-east-1.amazonaws.com']
    regions['s3.amazonaws.com'] = 'us-east-1'
    regions['s3-external-1.amazonaws.com'] = 'us-east-1'
    regions['s3.cn-north-1.amazonaws.com.cn'] = 'cn-north-1'
    regions['s3.cn-northwest-1.amazonaws.com.cn'] = 'cn-northwest-1'
    regions[''] = DEFAULT_REGION
    return MappingProxyType(regions)


DEFAULT_REGION_MAP = create_default_region_map()


def check_region_map(region_map):
    """
    Return region_map if it is usable for signing, or the default map if
    region_map is empty or None.

    Raise RegionMapError if a non-empty map has no default entry (keyed by
    the empty string), since resolution could then come back empty.

    """
    if not region_map:
        return DEFAULT_REGION_MAP
    if not region_map.get(''):
        raise RegionMapError('region map has no default entry for the '
                             'empty host suffix')
    return region_map


def get_region(region_map, host):
    """
    Return the region for host from region_map.

    The full host name is looked up first, then each shorter suffix left
    after dropping the left-most label, so the longest matching suffix wins.
    If nothing matches the map's default (empty string) entry is returned,
    or '' if the map has none.

    region_map -- mapping of host name suffix to region code
    host       -- request host, an optional :port is ignored

    """
    name = host.rsplit(':', 1)[0] if ':' in host else host
    name = name.lower()
    while name:
        region = region_map.get(name)
        if region:
            return region
        name = name.partition('.')[2]
    return region_map.get('', '')
