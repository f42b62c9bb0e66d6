import unittest


def pyUnitTests():
    """
    Aggregate unit tests from the test modules and return a suite.
    """
    test_module_names = [
        'identifier',
        'fetchers',
        'htmlmeta',
        'xrds',
        'yadis_discover',
        'discover',
        'authrequest',
        'consumer',
    ]

    test_modules = [
        __import__('openid_discovery.test.test_{}'.format(name), {}, {}, ['unused'])
        for name in test_module_names
    ]

    loader = unittest.TestLoader()
    suite = unittest.TestSuite()
    for m in test_modules:
        suite.addTest(loader.loadTestsFromModule(m))
    return suite


def test_suite():
    """
    Collect all of the tests together in a single suite.
    """
    return pyUnitTests()
