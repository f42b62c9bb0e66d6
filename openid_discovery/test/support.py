import urllib.request
import urllib.error
import urllib.parse
import io
import os
import socket


DATAPATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')

CONTENT_TYPES = {
    '.xrds': 'application/xrds+xml',
    '.html': 'text/html',
}


class HTTPResponse:
    def __init__(self, url, status, headers=None, body=b''):
        self.url = url
        self.status = status
        self.headers = headers or {}
        self._body = io.BytesIO(body)
        self.closed = False

    def info(self):
        return self.headers

    def read(self, *args):
        return self._body.read(*args)

    def close(self):
        self.closed = True

    def getheader(self, name, default=None):
        return {k.lower(): v for k, v in self.headers.items()}.get(name.lower(), default)


def gentests(cls):
    '''
    TestCase class decorator for data-driven tests.

    Reads a list of (name, args) pairs from cls.data and generates a separate
    test method named 'test_<name>' for each pair. The test method would call
    the method '_test' defined in a class to perform actual testing, passing it
    the args.
    '''
    for name, args in cls.data:
        def g(*args):
            def test_method(self):
                self._test(*args)
            return test_method
        method = g(*args)
        method.__name__ = 'test_' + name
        setattr(cls, method.__name__, method)
    return cls


def read_data(filename):
    with open(os.path.join(DATAPATH, filename), 'rb') as f:
        return f.read()


def _chain(kind, count, rest, query):
    '''
    Responses for /redirect/<n>/<path> and /hops/<n>/<path>: n HTTP or
    Yadis redirects before <path> is served.
    '''
    location = '/%s/%s/%s' % (kind, count - 1, rest)
    if query:
        location += '?' + query
    if kind == 'redirect':
        return 302, {'Location': location}, b''
    return 200, {
        'Content-Type': 'text/plain',
        'X-XRDS-Location': 'http://unittest' + location,
    }, b'Yadis hop'


def urlopen(request, timeout=None):
    '''
    Stand-in for fetchers.urlopen serving files from the data directory
    on the host "unittest". Behaviour is controlled by the URL:

        /<digits>                    responds with that status
        /redirect/<n>/<path>         n HTTP redirects, then <path>
        /hops/<n>/<path>             n X-XRDS-Location hops, then <path>
        ?redirect=<url>              302 to <url>
        ?header=<Name: value>        adds or replaces a response header

    Host "timeout" times out, any other host fails to connect.
    '''
    if isinstance(request, str):
        request = urllib.request.Request(request)
    # track the last call arguments
    urlopen.request = request
    urlopen.timeout = timeout

    url = request.get_full_url()
    parts = urllib.parse.urlparse(url)
    host = parts.netloc.split(':')[0]
    if host == 'timeout':
        raise urllib.error.URLError(socket.timeout('timed out'))
    if host != 'unittest':
        raise urllib.error.URLError('Wrong host: %s' % parts.netloc)

    query = urllib.parse.parse_qs(parts.query)
    path = parts.path.lstrip('/')
    segments = path.split('/', 2)
    headers = {'Content-Type': 'text/plain'}
    if len(segments) == 3 and segments[0] in ('redirect', 'hops') and int(segments[1]) > 0:
        status, extra, body = _chain(segments[0], int(segments[1]), segments[2], parts.query)
        headers.update(extra)
    elif len(segments) == 3 and segments[0] in ('redirect', 'hops'):
        url = urllib.parse.urlunparse(('http', 'unittest', segments[2], '', parts.query, ''))
        return urlopen(urllib.request.Request(url), timeout)
    elif 'redirect' in query:
        status, body = 302, b''
        headers['Location'] = query['redirect'][0]
    elif path.isdigit() or not path:
        status = int(path or 200)
        if 400 <= status:
            raise urllib.error.HTTPError(url, status, 'Requested status: %s' % status, {}, io.BytesIO())
        body = b'OK'
    else:
        try:
            body = read_data(path)
        except (FileNotFoundError, IsADirectoryError):
            raise urllib.error.HTTPError(url, 404, '%s not found' % path, {}, io.BytesIO())
        status = 200
        headers['Content-Type'] = CONTENT_TYPES.get(os.path.splitext(path)[1], 'text/plain')

    headers = {k.lower(): v for k, v in headers.items()}
    for header in query.get('header', []):
        name, value = header.split(': ', 1)
        headers[name.lower()] = value
    return HTTPResponse(url, status, headers, body)
