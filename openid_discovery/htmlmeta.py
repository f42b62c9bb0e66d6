"""Finding the Yadis document location in an HTML page.

This is a pattern match over the raw bytes, not an HTML parse: pages
served for Yadis discovery are small and the meta tag is expected near
the top of the head.
"""
import html
import re

from openid_discovery.errors import MetaTagNotFound, MetaTagMissingContent

__all__ = ['MetaScanner', 'YADIS_HEADER_NAME']


YADIS_HEADER_NAME = 'X-XRDS-Location'


class MetaScanner(object):
    """Looks for a <meta http-equiv="X-XRDS-Location"> tag.

    The patterns are compiled once, when the scanner is created, and never
    change afterwards, so one scanner can be shared between threads.
    """
    def __init__(self, header=YADIS_HEADER_NAME):
        self.header = header
        name = re.escape(header.encode('ascii'))
        self.meta_re = re.compile(
            br'<[ \t]*meta[^>]*http-equiv=["\']' + name + br'["\'][^>]*>',
            re.IGNORECASE,
        )
        self.content_re = re.compile(br'content=["\']([^"\']+)["\']', re.IGNORECASE)

    def scan(self, body):
        """Return the URL from the first matching meta tag in body.

        @param body: HTML page
        @type body: bytes

        @raises MetaTagNotFound: there is no such tag.
        @raises MetaTagMissingContent: the tag has no (or an empty)
            content attribute.
        """
        tag = self.meta_re.search(body)
        if tag is None:
            raise MetaTagNotFound('No %s meta tag found' % self.header)
        content = self.content_re.search(tag.group())
        location = content and html.unescape(content.group(1).decode('utf-8', 'replace')).strip()
        if not location:
            raise MetaTagMissingContent(
                'No content in meta tag: %s' % tag.group().decode('utf-8', 'replace'))
        return location
