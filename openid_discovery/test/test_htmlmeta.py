"""Tests for `openid_discovery.htmlmeta` module."""
import unittest

from openid_discovery.errors import MetaTagNotFound, MetaTagMissingContent
from openid_discovery.htmlmeta import MetaScanner
from . import support


@support.gentests
class Found(unittest.TestCase):
    data = [
        ('html', (b'<html><head><meta http-equiv="X-XRDS-Location" content="found"></head></html>',)),
        ('xhtml', (b'<html><head><meta http-equiv="X-XRDS-Location" content="found" /></head></html>',)),
        ('case_insensitive_header_name', (b'<html><head><meta http-equiv="x-xrds-location" content="found">',)),
        ('case_insensitive_tag', (b'<HTML><HEAD><META HTTP-EQUIV="X-XRDS-LOCATION" CONTENT="found">',)),
        ('single_quotes', (b"<meta http-equiv='X-XRDS-Location' content='found'>",)),
        ('content_first', (b'<meta content="found" http-equiv="X-XRDS-Location">',)),
        ('missing_end_tags', (b'<html><head><meta http-equiv="X-XRDS-Location" content="found">',)),
        ('leading_space', (b'< meta http-equiv="X-XRDS-Location" content="found">',)),
        ('other_meta_first', (b'<meta http-equiv="Content-Type" content="text/html">'
                              b'<meta http-equiv="X-XRDS-Location" content="found">',)),
        ('multiple_headers', (b'<html><head>'
                              b'<meta http-equiv="X-XRDS-Location" content="found">'
                              b'<meta http-equiv="X-XRDS-Location" content="not-found">',)),
        ('standard_entity', (b'<meta http-equiv="X-XRDS-Location" content="f&#111;und">',)),
    ]

    def _test(self, body):
        self.assertEqual(MetaScanner().scan(body), 'found')


class Scan(unittest.TestCase):
    def test_url(self):
        body = b'<html><head><meta http-equiv="X-XRDS-Location" content="https://op.example/xrds"></head></html>'
        self.assertEqual(MetaScanner().scan(body), 'https://op.example/xrds')

    def test_amp_entity(self):
        body = b'<meta http-equiv="X-XRDS-Location" content="http://unittest/?a=1&amp;b=2">'
        self.assertEqual(MetaScanner().scan(body), 'http://unittest/?a=1&b=2')

    def test_not_found(self):
        self.assertRaises(MetaTagNotFound, MetaScanner().scan, b'<html><head></head></html>')

    def test_other_meta(self):
        body = b'<meta http-equiv="Refresh" content="0; url=http://unittest/">'
        self.assertRaises(MetaTagNotFound, MetaScanner().scan, body)

    def test_missing_content(self):
        body = b'<meta http-equiv="X-XRDS-Location">'
        with self.assertRaises(MetaTagMissingContent):
            MetaScanner().scan(body)

    def test_empty_content(self):
        body = b'<meta http-equiv="X-XRDS-Location" content="">'
        self.assertRaises(MetaTagMissingContent, MetaScanner().scan, body)

    def test_partial_tag(self):
        self.assertRaises(MetaTagNotFound, MetaScanner().scan, b'<meta http-equiv="X-XRDS-Location" content="x"')

    def test_garbage(self):
        self.assertRaises(MetaTagNotFound, MetaScanner().scan, b'\x00\xff<<<>>>\xfe')
        self.assertRaises(MetaTagNotFound, MetaScanner().scan, b'')

    def test_data_file(self):
        body = support.read_data('http_equiv.html')
        self.assertEqual(MetaScanner().scan(body), 'http://unittest/openid2_xrds.xrds')

    def test_custom_header(self):
        scanner = MetaScanner('X-Other')
        self.assertEqual(scanner.scan(b'<meta http-equiv="x-other" content="found">'), 'found')
        self.assertRaises(MetaTagNotFound, scanner.scan, b'<meta http-equiv="X-XRDS-Location" content="x">')


if __name__ == '__main__':
    unittest.main()
