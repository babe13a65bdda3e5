"""
ASN.1 types for extensions that asn1crypto doesn't (reliably) define.
All of these are for encoding only.
"""

from asn1crypto import core, x509

from .oids import EXTENSION_OIDS


class ObjectIdentifiers(core.SequenceOf):
    # shared by extendedKeyUsage and the OCSP acceptableResponses extension
    _child_spec = core.ObjectIdentifier


class TLSFeatures(core.SequenceOf):
    _child_spec = core.Integer


class MSCertificateTemplate(core.Sequence):
    _fields = [
        ('template_id', core.ObjectIdentifier),
        ('major_version', core.Integer, {'optional': True}),
        ('minor_version', core.Integer, {'optional': True}),
    ]


def register_extensions():
    # Patch in the extensions asn1crypto may not know about, so that
    # x509.Extension objects carrying them can be parsed back.
    # Existing definitions take precedence.
    ext_map = x509.ExtensionId._map
    ext_specs = x509.Extension._oid_specs
    extra = [
        ('ms_certificate_template', MSCertificateTemplate),
        ('precert_poison', core.Null),
        ('tls_feature', TLSFeatures),
    ]
    for name, spec in extra:
        dotted = EXTENSION_OIDS[name]
        if dotted not in ext_map:
            ext_map[dotted] = name
            ext_specs[name] = spec


register_extensions()
