'''
Yadis discovery: locating the XRDS document for a URL.

A Discoverer sends a GET with "Accept: application/xrds+xml" and looks
at what comes back:

    - an XRDS document: done;
    - an HTML page: the location is taken from its
      <meta http-equiv="X-XRDS-Location"> tag and fetched next;
    - anything else: the location is taken from the X-XRDS-Location
      header, and if there's none Yadis has found nothing.

Both HTTP redirects within a request and Yadis level redirects between
requests are followed up to a limit.
'''
import http.client
import logging
import socket
import urllib.parse

from openid_discovery import fetchers
from openid_discovery.errors import (
    DiscoveryFailure, TransportError, DiscoveryTimeout, DiscoveryCancelled,
    TooManyRedirects, TooManyDiscoveryHops,
)
from openid_discovery.htmlmeta import MetaScanner, YADIS_HEADER_NAME


XRDS_CONTENT_TYPE = 'application/xrds+xml'

MAX_REDIRECTS = 5
MAX_HOPS = 5
DEFAULT_TIMEOUT = 30
MAX_RESPONSE = 1024 * 1024

TIMEOUT_ERRORS = (socket.timeout, TimeoutError)
NETWORK_ERRORS = (OSError, http.client.HTTPException, ValueError)


def transport_error(url, e):
    '''
    DiscoveryTimeout or TransportError for a network level exception e
    raised while talking to url.
    '''
    reason = getattr(e, 'reason', e)
    if isinstance(e, TIMEOUT_ERRORS) or isinstance(reason, TIMEOUT_ERRORS):
        return DiscoveryTimeout('Timed out fetching %s' % url, url)
    return TransportError('Error fetching %s: %s' % (url, reason), url)


class DiscoveryAttempt(object):
    '''
    State of a single discovery call. Never shared between calls.

    @ivar url: current target
    @ivar normalized_url: URL reached after following the HTTP redirects
        of the first hop, i.e. the normalized claimed identifier
    @ivar redirects: HTTP redirects followed within the current hop
    @ivar hops: Yadis hops made so far
    @ivar trace: what happened, for diagnostics
    '''

    def __init__(self, url):
        self.url = url
        self.normalized_url = None
        self.redirects = 0
        self.hops = 0
        self.trace = []

    def log(self, message, *args):
        message = message % args
        self.trace.append(message)
        logging.debug(message)

    def redirect(self, location):
        self.redirects += 1
        self.url = urllib.parse.urljoin(self.url, location)
        self.log('Redirected to %s', self.url)

    def hop(self, location):
        self.hops += 1
        self.redirects = 0
        self.url = urllib.parse.urljoin(self.url, location)


class YadisDocument(object):
    '''
    XRDS document found by discovery. Reading it reads the HTTP response
    body, which isn't consumed yet. Use it as a context manager or call
    close() to release the connection.
    '''
    found = True

    def __init__(self, normalized_url, xrds_url, response):
        self.normalized_url = normalized_url
        self.xrds_url = xrds_url
        self.response = response
        self.content_type = response.getheader('Content-Type')

    def read(self, *args):
        try:
            return self.response.read(*args)
        except NETWORK_ERRORS as e:
            raise transport_error(self.xrds_url, e) from e

    def close(self):
        self.response.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


class NoDiscoveryResult(object):
    '''
    Yadis has definitively found nothing for normalized_url. This is not
    an error: the caller may go on with HTML based discovery.
    '''
    found = False

    def __init__(self, normalized_url):
        self.normalized_url = normalized_url

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, self.normalized_url)


def _media_type(content_type):
    return content_type.split(';', 1)[0].strip()


class Discoverer(object):
    '''
    Yadis discovery engine. Its configuration is fixed at construction,
    the same instance can be used for any number of concurrent calls.

    @param fetch: function with the signature of fetchers.fetch doing a
        single request without following redirects
    @param scanner: object finding the XRDS location in HTML pages,
        htmlmeta.MetaScanner by default
    @param timeout: seconds to wait for each request, None for no limit
    @param max_response: how much of an HTML page is read looking for
        the meta tag
    '''

    def __init__(self, max_redirects=MAX_REDIRECTS, max_hops=MAX_HOPS,
                 timeout=DEFAULT_TIMEOUT, max_response=MAX_RESPONSE,
                 fetch=None, scanner=None):
        self.max_redirects = max_redirects
        self.max_hops = max_hops
        self.timeout = timeout
        self.max_response = max_response
        self.fetch = fetch or fetchers.fetch
        self.scanner = scanner or MetaScanner()

    def discover(self, url, cancel=None):
        '''
        Returns a YadisDocument or NoDiscoveryResult.

        @param cancel: optional object with an is_set() method, such as
            threading.Event; checked before every request

        @raises DiscoveryFailure: or one of its subclasses
        '''
        attempt = DiscoveryAttempt(url)
        try:
            return self._discover(attempt, cancel)
        except DiscoveryFailure as e:
            attempt.log('Discovery failed: %s', e)
            e.trace = attempt.trace
            raise

    def _discover(self, attempt, cancel):
        while attempt.hops < self.max_hops:
            attempt.log('Yadis hop %s: %s', attempt.hops + 1, attempt.url)
            response = self._request(attempt, cancel, XRDS_CONTENT_TYPE)
            if attempt.normalized_url is None:
                attempt.normalized_url = attempt.url

            content_type = (response.getheader('Content-Type') or '').lower()
            if content_type.startswith(XRDS_CONTENT_TYPE):
                attempt.log('Got XRDS from %s', attempt.url)
                return YadisDocument(attempt.normalized_url, attempt.url, response)

            try:
                if _media_type(content_type) == 'text/html':
                    location = self.scanner.scan(self._read(response, attempt.url))
                    attempt.log('XRDS location found in HTML: %s', location)
                else:
                    location = response.getheader(YADIS_HEADER_NAME)
                    if location:
                        attempt.log('XRDS location found in HTTP header: %s', location)
            finally:
                response.close()

            if not location:
                attempt.log('Yadis found nothing at %s', attempt.url)
                return NoDiscoveryResult(attempt.normalized_url)
            attempt.hop(location)

        raise TooManyDiscoveryHops('Too many Yadis redirects', attempt.url)

    def fetch_page(self, url, cancel=None):
        '''
        Fetches a page following HTTP redirects. Returns a tuple
        (final_url, body).
        '''
        attempt = DiscoveryAttempt(url)
        response = self._request(attempt, cancel, 'text/html, application/xhtml+xml')
        try:
            return attempt.url, self._read(response, attempt.url)
        finally:
            response.close()

    def _request(self, attempt, cancel, accept):
        '''
        GETs attempt.url following HTTP redirects, returns the final
        response.
        '''
        while attempt.redirects < self.max_redirects:
            if cancel is not None and cancel.is_set():
                raise DiscoveryCancelled('Discovery cancelled', attempt.url)
            response = self._get(attempt.url, accept)
            if response.status not in fetchers.REDIRECT_CODES:
                return response
            location = response.getheader('Location')
            response.close()
            if not location:
                raise TransportError('Redirect (%s) without Location' % response.status, attempt.url)
            attempt.redirect(location)
        raise TooManyRedirects('Too many redirections', attempt.url)

    def _get(self, url, accept):
        try:
            return self.fetch(url, headers={'Accept': accept}, timeout=self.timeout)
        except NETWORK_ERRORS as e:
            raise transport_error(url, e) from e

    def _read(self, response, url):
        try:
            return response.read(self.max_response)
        except NETWORK_ERRORS as e:
            raise transport_error(url, e) from e


def discover(url, cancel=None):
    '''
    Yadis discovery with the default settings.
    '''
    return Discoverer().discover(url, cancel)
