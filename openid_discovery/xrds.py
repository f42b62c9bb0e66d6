"""
ElementTree interface to an XRDS document.
"""
from lxml import etree

from openid_discovery.errors import MalformedDocument, NoSupportedServiceType, XRDSError


NAMESPACES = {
    'xrd': 'xri://$xrd*($v*2.0)',
    'xrds': 'xri://$xrds',
    'openid': 'http://openid.net/xmlns/1.0',
}

OPENID_IDP_2_0_TYPE = 'http://specs.openid.net/auth/2.0/server'
OPENID_2_0_TYPE = 'http://specs.openid.net/auth/2.0/signon'
OPENID_1_1_TYPE = 'http://openid.net/signon/1.1'
OPENID_1_0_TYPE = 'http://openid.net/signon/1.0'

LEGACY_TYPES = [OPENID_1_1_TYPE, OPENID_1_0_TYPE]

# OpenID service type URIs, listed in order of preference.
SERVICE_TYPES = [
    OPENID_IDP_2_0_TYPE,
    OPENID_2_0_TYPE,
    OPENID_1_1_TYPE,
    OPENID_1_0_TYPE,
]


def t(prefixed_name):
    prefix, name = prefixed_name.split(':')
    return '{%s}%s' % (NAMESPACES[prefix], name)


def _parser():
    # Documents come from arbitrary hosts: no entities, no network.
    return etree.XMLParser(resolve_entities=False, no_network=True)


def parseXRDS(text):
    """Parse the given text as an XRDS document.

    @return: ElementTree containing an XRDS document

    @raises MalformedDocument: When there is a parse error or the document
        does not contain an XRDS.
    """
    try:
        root = etree.fromstring(text, _parser())
    except (etree.XMLSyntaxError, ValueError) as e:
        raise MalformedDocument('Error parsing document as XML: %s' % e) from e
    if root is None or root.tag != t('xrds:XRDS'):
        raise MalformedDocument('Not an XRDS document')
    return etree.ElementTree(root)


def getURI(service_element):
    """Stripped text of the first URI tag of a Service element, None
    if absent. Further URIs are ignored."""
    uri_element = service_element.find(t('xrd:URI'))
    if uri_element is None:
        return None
    return (uri_element.text or '').strip() or None


def getLocalID(service_element, is_v1, is_v2):
    '''
    OP-Local Identifier of a Service element: openid:Delegate for OpenID 1
    services, xrd:LocalID for OpenID 2 ones. Only the tags of the declared
    versions are looked at and all of them must agree.
    '''
    local_id_tags = []
    if is_v1:
        local_id_tags.append(t('openid:Delegate'))
    if is_v2:
        local_id_tags.append(t('xrd:LocalID'))

    local_id = None
    for local_id_tag in local_id_tags:
        for local_id_element in service_element.findall(local_id_tag):
            value = (local_id_element.text or '').strip()
            if local_id is None:
                local_id = value
            elif local_id != value:
                raise MalformedDocument('More than one %r tag found in one service element' % local_id_tag)
    return local_id or None


class ServiceDescriptor(object):
    """Contents of an xrd:Service element.

    @ivar types: declared type URIs, in document order
    @ivar uri: first service URI or None
    @ivar local_id: OP-Local Identifier or None
    """

    def __init__(self, types, uri=None, local_id=None):
        self.types = types
        self.uri = uri
        self.local_id = local_id

    @classmethod
    def fromElement(cls, service_element):
        types = [(e.text or '').strip() for e in service_element.findall(t('xrd:Type'))]
        is_v1 = any(type_uri in types for type_uri in LEGACY_TYPES)
        is_v2 = OPENID_2_0_TYPE in types
        return cls(types, getURI(service_element), getLocalID(service_element, is_v1, is_v2))

    def resolve(self):
        '''
        Returns (type_uri, endpoint, identifier) for the most preferred
        OpenID type this service declares. The identifier is empty for
        provider-only services, when the provider selects the identity.

        @raises NoSupportedServiceType: no OpenID type or no URI
        '''
        if not self.uri:
            raise NoSupportedServiceType('Service element has no URI')
        if OPENID_IDP_2_0_TYPE in self.types:
            return OPENID_IDP_2_0_TYPE, self.uri, ''
        for type_uri in [OPENID_2_0_TYPE] + LEGACY_TYPES:
            if type_uri in self.types:
                return type_uri, self.uri, self.local_id or ''
        raise NoSupportedServiceType('No supported Identifier Elements in Service Types list')

    def __repr__(self):
        return '<%s types=%r uri=%s>' % (self.__class__.__name__, self.types, self.uri)


def first_service(tree):
    """Return the descriptor of the first Service element of the last XRD.

    Only the first service is looked at, even if the document lists
    several of them with different priorities.
    """
    try:
        xrd = tree.findall(t('xrd:XRD'))[-1] # the last XRD is the final resolution step
    except IndexError:
        raise MalformedDocument('No XRD elements found')
    element = xrd.find(t('xrd:Service'))
    if element is None:
        raise NoSupportedServiceType('No Service elements found')
    return ServiceDescriptor.fromElement(element)


def read_descriptor(stream):
    return first_service(parseXRDS(stream.read()))


def parse(stream):
    '''
    Reads an XRDS document from a binary stream and returns the pair
    (endpoint, identifier).
    '''
    _, endpoint, identifier = read_descriptor(stream).resolve()
    return endpoint, identifier


def build_xrds(endpoint, identifier=None, type_uri=OPENID_2_0_TYPE):
    '''
    Generates an XRDS document with a single service of type_uri. The
    identifier goes to openid:Delegate for OpenID 1 types and to
    xrd:LocalID otherwise.
    '''
    nsmap = {None: NAMESPACES['xrd'], 'xrds': NAMESPACES['xrds'], 'openid': NAMESPACES['openid']}
    root = etree.Element(t('xrds:XRDS'), nsmap=nsmap)
    xrd = etree.SubElement(root, t('xrd:XRD'))
    service = etree.SubElement(xrd, t('xrd:Service'), priority='0')
    etree.SubElement(service, t('xrd:Type')).text = type_uri
    etree.SubElement(service, t('xrd:URI')).text = endpoint
    if identifier:
        tag = 'openid:Delegate' if type_uri in LEGACY_TYPES else 'xrd:LocalID'
        etree.SubElement(service, t(tag)).text = identifier
    return etree.tostring(root, xml_declaration=True, encoding='UTF-8')
