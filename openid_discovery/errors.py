'''
Exceptions raised while discovering OpenID endpoints.

Everything raised by the discovery pipeline derives from DiscoveryFailure,
so callers that don't care about the details can catch just that.
'''


class DiscoveryFailure(Exception):
    '''
    Base class for discovery errors.

    @ivar url: the URL being processed when the error happened, if any.
    @ivar trace: diagnostic trace of the discovery attempt that failed,
        filled in by the Yadis engine.
    '''
    def __init__(self, message, url=None):
        Exception.__init__(self, message)
        self.url = url
        self.trace = []


class UnsupportedIdentifierType(DiscoveryFailure):
    '''
    The identifier is an XRI, which this library doesn't resolve.
    '''


class TransportError(DiscoveryFailure):
    '''
    Network level failure: connection, DNS, TLS, bad URL or an HTTP error
    status.
    '''


class DiscoveryTimeout(TransportError):
    '''
    A request didn't complete in time. The caller may retry.
    '''


class DiscoveryCancelled(DiscoveryFailure):
    '''
    The cancellation token was set before the next request.
    '''


class TooManyRedirects(DiscoveryFailure):
    '''
    HTTP redirect budget of a single Yadis hop exhausted.
    '''


class TooManyDiscoveryHops(DiscoveryFailure):
    '''
    Yadis level redirects (X-XRDS-Location) budget exhausted.
    '''


class MetaTagNotFound(DiscoveryFailure):
    """Yadis meta tag not found in the HTML page."""


class MetaTagMissingContent(MetaTagNotFound):
    """Yadis meta tag found but it has no content attribute."""


class XRDSError(DiscoveryFailure):
    '''
    General error with the XRDS document.
    '''


class MalformedDocument(XRDSError):
    '''
    The document can't be decoded as an XRDS document.
    '''


class NoSupportedServiceType(XRDSError):
    '''
    The document is fine but doesn't describe a usable OpenID service.
    '''
