'''
Functions to discover OpenID endpoints from identifiers.
'''
import logging

import html5lib

from openid_discovery import identifier as idnorm
from openid_discovery import xrds, yadis
from openid_discovery.errors import (
    DiscoveryFailure, UnsupportedIdentifierType, MetaTagNotFound, NoSupportedServiceType,
)
from openid_discovery.xrds import (
    OPENID_IDP_2_0_TYPE, OPENID_2_0_TYPE, OPENID_1_1_TYPE,
)


class Service(object):
    """Object representing an OpenID service endpoint.

    @ivar server_url: the provider endpoint
    @ivar claimed_id: the identifier the user claims, None when the
        provider is to select it
    @ivar local_id: the provider-local identifier, if different
    """

    def __init__(self, types=None, server_url=None, claimed_id=None, local_id=None):
        self.types = types if types is not None else [OPENID_2_0_TYPE]
        self.server_url = server_url
        self.claimed_id = claimed_id
        self.local_id = local_id

    def is_op_identifier(self):
        return OPENID_IDP_2_0_TYPE in self.types

    def identity(self):
        '''
        Return the identifier that should be sent as the
        openid.identity parameter to the server.
        '''
        return self.local_id or self.claimed_id

    def __str__(self):
        return '<%s server_url=%s claimed_id=%s local_id=%s>' % (
            self.__class__.__name__,
            self.server_url,
            self.claimed_id,
            self.local_id,
        )


def parse_html(url, html):
    '''
    Services declared with <link rel="openid2.provider"> and
    <link rel="openid.server"> in the head of an HTML page.
    '''
    root = html5lib.parse(html)
    links = root.findall('{http://www.w3.org/1999/xhtml}head/{http://www.w3.org/1999/xhtml}link')
    hrefs = {}
    for link in links:
        for rel in link.get('rel', '').split():
            hrefs.setdefault(rel.lower(), (link.get('href') or '').strip())

    link_types = [
        (OPENID_2_0_TYPE, 'openid2.provider', 'openid2.local_id'),
        (OPENID_1_1_TYPE, 'openid.server', 'openid.delegate'),
    ]

    return [
        Service([type_uri], hrefs[op_endpoint_rel], url, hrefs.get(local_id_rel) or None)
        for type_uri, op_endpoint_rel, local_id_rel in link_types
        if hrefs.get(op_endpoint_rel)
    ]


def parse_xrds(url, document):
    '''
    Service described by the first service element of an XRDS document.
    '''
    type_uri, endpoint, local_id = xrds.read_descriptor(document).resolve()
    if type_uri == OPENID_IDP_2_0_TYPE:
        return Service([type_uri], endpoint)
    return Service([type_uri], endpoint, url, local_id or None)


def discover_html(url, discoverer, cancel=None):
    final_url, body = discoverer.fetch_page(url, cancel)
    services = parse_html(final_url, body)
    if not services:
        raise DiscoveryFailure('No services found for %s' % url, url)
    return services[0]


def discover(identifier, discoverer=None, cancel=None):
    '''
    Returns the Service to authenticate identifier with.

    Yadis discovery is tried first, HTML discovery is used when it
    finds nothing usable.

    @raises UnsupportedIdentifierType: for XRIs
    @raises DiscoveryFailure: when nothing is found or on errors
    '''
    try:
        url, kind = idnorm.normalize(identifier)
    except ValueError as e:
        raise DiscoveryFailure('Normalizing identifier: %s' % e) from e
    if kind == idnorm.XRI:
        raise UnsupportedIdentifierType('XRI identifiers are not supported: %s' % url, url)

    if discoverer is None:
        discoverer = yadis.Discoverer()
    try:
        result = discoverer.discover(url, cancel)
    except MetaTagNotFound as e:
        logging.info('Yadis meta tag problem for %s (%s), trying HTML discovery', url, e)
        return discover_html(url, discoverer, cancel)

    if result.found:
        try:
            with result:
                service = parse_xrds(result.normalized_url, result)
        except NoSupportedServiceType as e:
            logging.info('No OpenID service in %s (%s), trying HTML discovery', result.xrds_url, e)
        else:
            logging.info('Discovered %s for %s', service, url)
            return service
    return discover_html(result.normalized_url, discoverer, cancel)
