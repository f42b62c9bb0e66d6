# -*- test-case-name: openid_discovery.test.test_consumer -*-
"""OpenID support for Relying Parties, the discovery half.

The OpenID identity verification process most commonly uses the
following steps:

    1. The user enters their OpenID into a field on the consumer's
       site, and hits a login button.

    2. The consumer site discovers the user's OpenID provider using
       the Yadis protocol (L{get_redirect_url}).

    3. The consumer site sends the browser a redirect to the
       OpenID provider.  This is the authentication request as
       described in the OpenID specification.

    4. The OpenID provider's site sends the browser a redirect
       back to the consumer site.  The information in it must match
       what discovery on the asserted claimed identifier finds
       (L{verify_discovered}).

Checking signatures of the response and managing associations with
providers is not done here.
"""
import logging
import urllib.parse

from openid_discovery import discover as disco
from openid_discovery.authrequest import OPENID2_NS, build_redirect


class VerificationError(ValueError):
    '''
    The response doesn't match the discovered information.

    @ivar query: the response arguments
    '''
    def __init__(self, message, query):
        ValueError.__init__(self, message)
        self.query = query


def get_redirect_url(identifier, realm, return_to, discoverer=None, cancel=None, immediate=False):
    """Discovers the provider for identifier and returns the URL to
    redirect the user agent to.

    @param identifier: Identity URL given by the user. A URL without a
        scheme, like example.com, is treated as http://example.com
    @param realm: URL of your site, e.g. http://www.example.com
    @param return_to: path under the realm where the provider should
        send the user back, e.g. /login/check

    @raises openid_discovery.errors.DiscoveryFailure: when no provider
        could be found; UnsupportedIdentifierType for XRIs.
    """
    service = disco.discover(identifier, discoverer, cancel)
    url = build_redirect(service.server_url, service.claimed_id, realm, return_to,
                         local_id=service.local_id, immediate=immediate)
    logging.info('Generated %s request to %s',
                 'checkid_immediate' if immediate else 'checkid_setup', service.server_url)
    return url


def verify_discovered(query, discoverer=None, cancel=None):
    '''
    Checks a positive assertion against information discovered for its
    claimed identifier and returns the discovered Service.

    @param query: response arguments as a dict, e.g.
        dict(urllib.parse.parse_qsl(query_string))

    @raises VerificationError: when the response is not a positive
        assertion or doesn't match discovery
    @raises openid_discovery.errors.DiscoveryFailure: when rediscovery
        fails
    '''
    mode = query.get('openid.mode')
    if mode != 'id_res':
        raise VerificationError('Mode missing or invalid: %s' % mode, query)
    if query.get('openid.ns') != OPENID2_NS:
        raise VerificationError('Expected an OpenID 2 response', query)

    claimed_id = query.get('openid.claimed_id')
    identity = query.get('openid.identity')
    if (claimed_id is None) != (identity is None):
        raise VerificationError(
            'openid.identity and openid.claimed_id should be either both '
            'present or both absent',
            query
        )
    if claimed_id is None:
        raise VerificationError('No identifier in the response', query)
    claimed_id = urllib.parse.urldefrag(claimed_id)[0]

    service = disco.discover(claimed_id, discoverer, cancel)

    op_endpoint = query.get('openid.op_endpoint')
    if op_endpoint != service.server_url:
        raise VerificationError('Bad OP Endpoint: %s' % op_endpoint, query)
    if claimed_id != service.claimed_id:
        raise VerificationError('Bad Claimed ID: %s' % claimed_id, query)
    if identity != service.identity():
        raise VerificationError('Bad Identity: %s' % identity, query)
    return service
