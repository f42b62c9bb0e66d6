'''
Wrapper around urlopen providing default parameters and safety checkings.

Unlike a plain urlopen redirects are not followed: 3xx responses are
returned to the caller which decides whether and how far to follow them.
'''
import urllib.request
import urllib.error
import urllib.parse
import sys

import openid_discovery


USER_AGENT = 'openid-discovery/%s (%s) Python-urllib/%s' % (
    openid_discovery.__version__,
    sys.platform,
    urllib.request.__version__,
)

REDIRECT_CODES = (301, 302, 303, 307)


class RedirectPassthrough(urllib.request.HTTPErrorProcessor):
    '''
    Returns every 3xx response as is, so HTTPRedirectHandler never follows
    one (not even a 308). Other non-2xx statuses still raise HTTPError.
    '''
    def http_response(self, request, response):
        if 300 <= response.status < 400:
            return response
        return super().http_response(request, response)

    https_response = http_response


def urlopen(request, timeout=None):
    # A new opener for every request, urllib also closes the connection
    # after each response.
    opener = urllib.request.build_opener(RedirectPassthrough)
    return opener.open(request, timeout=timeout)


def fetch(url, body=None, headers=None, timeout=None):
    if urllib.parse.urlparse(url).scheme not in ('http', 'https'):
        raise urllib.error.URLError('Bad URL scheme: %r' % url)

    if headers is None:
        headers = {}
    headers.setdefault('User-Agent', USER_AGENT)

    request = urllib.request.Request(url, data=body, headers=headers)
    return urlopen(request, timeout=timeout)
