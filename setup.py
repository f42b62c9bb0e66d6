from setuptools import setup, find_packages
from codecs import open

setup(
    name='openid-discovery',
    version='0.1.0',
    description='OpenID 2.0 provider discovery for Relying Parties: Yadis, XRDS and HTML links.',
    long_description=open('README.md', encoding='utf-8').read(),
    long_description_content_type='text/markdown',
    license='Apache',
    keywords='openid yadis xrds discovery',

    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: Apache Software License',
        'Programming Language :: Python :: 3',
        'Topic :: Internet :: WWW/HTTP',
    ],

    python_requires='>=3.6',
    install_requires=['html5lib', 'lxml'],
    packages=find_packages(exclude=['openid_discovery.test']),
    test_suite='openid_discovery.test.test_suite',
)
