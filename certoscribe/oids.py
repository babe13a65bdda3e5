"""
Object identifiers of the extensions that certoscribe knows how to encode.

Extensions can be referred to by the names in :data:`EXTENSION_OIDS` or by
their dotted OID.
"""

import re
from typing import Union

from asn1crypto import core

__all__ = [
    'EXTENSION_OIDS', 'EXTENSION_NAMES', 'is_dotted_oid',
    'resolve_extension_id', 'extension_name', 'unmap_oid',
]

EXTENSION_OIDS = {
    # RFC 5280 certificate extensions
    'subject_key_identifier': '2.5.29.14',
    'key_usage': '2.5.29.15',
    'subject_alt_name': '2.5.29.17',
    'issuer_alt_name': '2.5.29.18',
    'basic_constraints': '2.5.29.19',
    'name_constraints': '2.5.29.30',
    'crl_distribution_points': '2.5.29.31',
    'certificate_policies': '2.5.29.32',
    'authority_key_identifier': '2.5.29.35',
    'policy_constraints': '2.5.29.36',
    'extended_key_usage': '2.5.29.37',
    'freshest_crl': '2.5.29.46',
    'inhibit_any_policy': '2.5.29.54',
    'authority_information_access': '1.3.6.1.5.5.7.1.1',
    'subject_information_access': '1.3.6.1.5.5.7.1.11',
    # RFC 7633
    'tls_feature': '1.3.6.1.5.5.7.1.24',
    # RFC 5280 CRL and CRL entry extensions
    'crl_number': '2.5.29.20',
    'crl_reason': '2.5.29.21',
    'invalidity_date': '2.5.29.24',
    'delta_crl_indicator': '2.5.29.27',
    'issuing_distribution_point': '2.5.29.28',
    'certificate_issuer': '2.5.29.29',
    # RFC 6960
    'ocsp_nonce': '1.3.6.1.5.5.7.48.1.2',
    'acceptable_responses': '1.3.6.1.5.5.7.48.1.4',
    'ocsp_no_check': '1.3.6.1.5.5.7.48.1.5',
    # RFC 6962
    'precert_signed_certificate_timestamps': '1.3.6.1.4.1.11129.2.4.2',
    'precert_poison': '1.3.6.1.4.1.11129.2.4.3',
    'signed_certificate_timestamps': '1.3.6.1.4.1.11129.2.4.5',
    # MS-WCCE
    'ms_certificate_template': '1.3.6.1.4.1.311.21.7',
}

EXTENSION_NAMES = {oid: name for name, oid in EXTENSION_OIDS.items()}

_DOTTED_OID_RE = re.compile(r'[0-2](\.(0|[1-9][0-9]*))+')


def is_dotted_oid(value) -> bool:
    return isinstance(value, str) and _DOTTED_OID_RE.fullmatch(value) is not None


def resolve_extension_id(extn_id: Union[str, core.ObjectIdentifier]) -> str:
    """
    Normalise an extension identifier to a dotted OID string.

    :param extn_id:
        A dotted OID string, one of the names in :data:`EXTENSION_OIDS`,
        or an ``asn1crypto`` object identifier.
    :return:
        The dotted OID. Whether certoscribe has an encoder for it is not
        checked here.
    :raises ValueError:
        if the input is neither a known name nor a dotted OID.
    """
    if isinstance(extn_id, core.ObjectIdentifier):
        return extn_id.dotted
    if not isinstance(extn_id, str):
        raise TypeError(
            f"Extension IDs must be strings or ObjectIdentifier objects, "
            f"not {type(extn_id).__name__}."
        )
    try:
        return EXTENSION_OIDS[extn_id]
    except KeyError:
        pass
    if not is_dotted_oid(extn_id):
        raise ValueError(
            f"'{extn_id}' is neither a known extension name nor a dotted OID."
        )
    return extn_id


def extension_name(dotted: str) -> str:
    """Human-readable name for an extension OID, or the OID itself."""
    return EXTENSION_NAMES.get(dotted, dotted)


def unmap_oid(oid_class, value: str) -> str:
    """
    Translate a name known to one of ``asn1crypto``'s object identifier
    classes (e.g. ``server_auth`` for :class:`.x509.KeyPurposeId`) to a
    dotted OID. Dotted OIDs are passed through unchanged.

    :raises ValueError:
        if the value is neither a dotted OID nor a name in the class' map.
    """
    if not isinstance(value, str):
        raise TypeError(
            f"Object identifiers must be strings, not {type(value).__name__}."
        )
    if is_dotted_oid(value):
        return value
    for dotted, name in oid_class._map.items():
        if name == value:
            return dotted
    raise ValueError(
        f"'{value}' is not a dotted OID, nor a name known to "
        f"{oid_class.__name__}."
    )
