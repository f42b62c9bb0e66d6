#-*-coding: utf-8-*-
"""
OpenID 2.0 endpoint discovery for Relying Parties.

Turns a user supplied identifier into the OpenID provider endpoint using
the Yadis protocol and XRDS documents (falling back to HTML links), and
builds the authentication request URL to redirect the user to.

See :func:`openid_discovery.consumer.get_redirect_url` for the main entry
point and :mod:`openid_discovery.yadis` for the discovery engine.

.. code-block:: none

    Licensed under the Apache License, Version 2.0 (the "License");
    you may not use this file except in compliance with the License.
    You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0

    Unless required by applicable law or agreed to in writing, software
    distributed under the License is distributed on an "AS IS" BASIS,
    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
    See the License for the specific language governing permissions
    and limitations under the License.
"""

version_info = (0, 1, 0)

__version__ = ".".join(str(x) for x in version_info)

__all__ = [
    'authrequest',
    'consumer',
    'discover',
    'errors',
    'fetchers',
    'htmlmeta',
    'identifier',
    'xrds',
    'yadis',
]
