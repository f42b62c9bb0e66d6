'''
OpenID 2.0 authentication request (checkid_setup) URLs.
'''
import urllib.parse


OPENID2_NS = 'http://specs.openid.net/auth/2.0'
IDENTIFIER_SELECT = 'http://specs.openid.net/auth/2.0/identifier_select'


def build_redirect(endpoint, claimed_id, realm, return_to, local_id=None, immediate=False):
    """Returns the provider endpoint URL with the authentication request
    appended as query arguments. You should redirect the user agent to
    this URL.

    @param endpoint: provider endpoint URL found by discovery

    @param claimed_id: identifier the user claims to own. When empty the
        provider is asked to select the identity.

    @param realm: The URL that identifies your web site to the user when
        she is authorizing it.

    @param return_to: path on the realm where the provider sends the user
        back, realm + return_to must be a full URL.

    @param local_id: provider-local identifier to send as openid.identity,
        defaults to claimed_id

    @param immediate: request checkid_immediate instead of checkid_setup

    @returntype: str
    """
    if not claimed_id:
        claimed_id = local_id = IDENTIFIER_SELECT
    args = [
        ('openid.ns', OPENID2_NS),
        ('openid.mode', 'checkid_immediate' if immediate else 'checkid_setup'),
        ('openid.return_to', realm + return_to),
        ('openid.realm', realm),
        ('openid.claimed_id', claimed_id),
        ('openid.identity', local_id or claimed_id),
    ]
    if '?' not in endpoint:
        separator = '?'
    elif endpoint.endswith(('?', '&')):
        separator = ''
    else:
        separator = '&'
    return endpoint + separator + urllib.parse.urlencode(args)
