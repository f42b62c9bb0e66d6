'''
Normalization of user supplied identifiers, section 7.2 of OpenID
Authentication 2.0.
'''
import urllib.parse


URL = 'url'
XRI = 'xri'

XRI_PREFIX = 'xri://'
# Global context symbols
XRI_AUTHORITIES = ('=', '@', '+', '$', '!')


def unprefix(identifier):
    return identifier[len(XRI_PREFIX):] if identifier.startswith(XRI_PREFIX) else identifier


def is_xri(identifier):
    return unprefix(identifier).startswith(XRI_AUTHORITIES)


def normalize(raw):
    '''
    Returns a pair (identifier, kind) where kind is either URL or XRI.

    XRIs are only stripped of the "xri://" prefix. URLs are guaranteed to
    have an http or https scheme and no fragment. Redirects are not
    resolved here, that happens during discovery.

    Raises ValueError for an empty identifier.
    '''
    identifier = unprefix(raw.strip())
    if not identifier:
        raise ValueError('Empty identifier: %r' % raw)
    if is_xri(identifier):
        return identifier, XRI

    if not identifier.lower().startswith(('http://', 'https://')):
        identifier = 'http://' + identifier
    identifier = urllib.parse.urldefrag(identifier)[0]
    return identifier, URL
