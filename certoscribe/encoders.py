"""
DER encoders for extension values.

Every encoder takes one of the value types in :mod:`certoscribe.values` and
returns the DER encoding of the extension's ``extnValue`` contents (i.e.
what goes *inside* the OCTET STRING). Encoders are pure functions; they are
bound to extension OIDs in :data:`.extension_encoder_registry`.
"""

import struct

from asn1crypto import core, crl, x509

from . import values
from ._asn1_types import MSCertificateTemplate, ObjectIdentifiers, TLSFeatures
from .asn1_utils import (
    bit_string,
    der_uint,
    generalized_time,
    reason_flags,
    sequence,
    set_bit,
    trim_bit_mask,
)
from .errors import (
    ExtensionEncodingError,
    NonASCIIError,
    UnrecognizedEnumerationError,
)
from .names import encode_general_name, encode_general_names, \
    encode_relative_name
from .registry import extension_encoder_registry

__all__ = ['CRL_REASON_CODES']

register = extension_encoder_registry.register


@register('basic_constraints', value_type=values.BasicConstraints)
def encode_basic_constraints(value: values.BasicConstraints) -> bytes:
    params = {}
    if value.ca:
        params['ca'] = True
    if value.path_length is not None:
        params['path_len_constraint'] = der_uint(value.path_length)
    return sequence(x509.BasicConstraints, params).dump()


@register('key_usage', value_type=values.KeyUsage)
def encode_key_usage(value: values.KeyUsage) -> bytes:
    mask = bytearray(2)
    set_bit(mask, 0, value.digital_signature)
    set_bit(mask, 1, value.content_commitment)
    set_bit(mask, 2, value.key_encipherment)
    set_bit(mask, 3, value.data_encipherment)
    set_bit(mask, 4, value.key_agreement)
    set_bit(mask, 5, value.key_cert_sign)
    set_bit(mask, 6, value.crl_sign)
    if value.key_agreement:
        set_bit(mask, 7, value.encipher_only)
        set_bit(mask, 8, value.decipher_only)
    data, unused_bits = trim_bit_mask(mask)
    return bit_string(data, unused_bits, cls=x509.KeyUsage).dump()


@register('subject_key_identifier', value_type=values.SubjectKeyIdentifier)
def encode_subject_key_identifier(value: values.SubjectKeyIdentifier):
    return core.OctetString(value.digest).dump()


@register(
    'authority_key_identifier', value_type=values.AuthorityKeyIdentifier
)
def encode_authority_key_identifier(value: values.AuthorityKeyIdentifier):
    params = {}
    if value.key_identifier is not None:
        params['key_identifier'] = value.key_identifier
    if value.authority_cert_issuer is not None:
        params['authority_cert_issuer'] = encode_general_names(
            value.authority_cert_issuer
        )
    if value.authority_cert_serial_number is not None:
        params['authority_cert_serial_number'] = der_uint(
            value.authority_cert_serial_number
        )
    return sequence(x509.AuthorityKeyIdentifier, params).dump()


def _distribution_point_name(full_name, relative_name):
    # the full name takes precedence
    if full_name is not None:
        return x509.DistributionPointName(
            name='full_name', value=encode_general_names(full_name)
        )
    elif relative_name is not None:
        return x509.DistributionPointName(
            name='name_relative_to_crl_issuer',
            value=encode_relative_name(relative_name)
        )
    return None


def _reason_flags(reasons):
    # sort for a stable iteration order, the bit string doesn't care
    return reason_flags(sorted(r.value for r in reasons))


def _distribution_point(point: values.DistributionPoint):
    params = {}
    dp_name = _distribution_point_name(point.full_name, point.relative_name)
    if dp_name is not None:
        params['distribution_point'] = dp_name
    if point.reasons is not None:
        params['reasons'] = _reason_flags(point.reasons)
    if point.crl_issuer is not None:
        params['crl_issuer'] = encode_general_names(point.crl_issuer)
    return sequence(x509.DistributionPoint, params)


@register(
    'crl_distribution_points', 'freshest_crl',
    value_type=values.DistributionPoints
)
def encode_distribution_points(value: values.DistributionPoints) -> bytes:
    return x509.CRLDistributionPoints(
        [_distribution_point(p) for p in value.points]
    ).dump()


@register(
    'issuing_distribution_point',
    value_type=values.IssuingDistributionPoint
)
def encode_issuing_distribution_point(
        value: values.IssuingDistributionPoint) -> bytes:
    params = {}
    dp_name = _distribution_point_name(value.full_name, value.relative_name)
    if dp_name is not None:
        params['distribution_point'] = dp_name
    # DEFAULT FALSE fields are left out unless set
    for flag in ('only_contains_user_certs', 'only_contains_ca_certs'):
        if getattr(value, flag):
            params[flag] = True
    if value.only_some_reasons is not None:
        params['only_some_reasons'] = _reason_flags(value.only_some_reasons)
    for flag in ('indirect_crl', 'only_contains_attribute_certs'):
        if getattr(value, flag):
            params[flag] = True
    return sequence(crl.IssuingDistributionPoint, params).dump()


def _utf8_display_text(text: str) -> x509.DisplayText:
    return x509.DisplayText(name='utf8_string', value=text)


def _user_notice(notice: values.UserNotice) -> x509.UserNotice:
    params = {}
    ref = notice.notice_reference
    if ref is not None:
        params['notice_ref'] = x509.NoticeReference({
            'organization': _utf8_display_text(ref.organization),
            'notice_numbers': x509.NoticeNumbers(
                [der_uint(num) for num in ref.notice_numbers]
            ),
        })
    if notice.explicit_text is not None:
        params['explicit_text'] = _utf8_display_text(notice.explicit_text)
    return sequence(x509.UserNotice, params)


def _policy_qualifier(qualifier) -> x509.PolicyQualifierInfo:
    if isinstance(qualifier, str):
        if not qualifier.isascii():
            raise NonASCIIError("Qualifier must be an ASCII-string.")
        return x509.PolicyQualifierInfo({
            'policy_qualifier_id': 'certification_practice_statement',
            'qualifier': core.IA5String(qualifier),
        })
    return x509.PolicyQualifierInfo({
        'policy_qualifier_id': 'user_notice',
        'qualifier': _user_notice(qualifier),
    })


@register('certificate_policies', value_type=values.CertificatePolicies)
def encode_certificate_policies(value: values.CertificatePolicies) -> bytes:
    policies = []
    for policy in value.policies:
        params = {'policy_identifier': policy.policy_identifier}
        if policy.policy_qualifiers is not None:
            params['policy_qualifiers'] = x509.PolicyQualifierInfos([
                _policy_qualifier(q) for q in policy.policy_qualifiers
            ])
        policies.append(x509.PolicyInformation(params))
    return x509.CertificatePolicies(policies).dump()


def _subtrees(names) -> x509.GeneralSubtrees:
    # minimum and maximum stay at their defaults
    return x509.GeneralSubtrees([
        x509.GeneralSubtree({'base': encode_general_name(name)})
        for name in names
    ])


@register('name_constraints', value_type=values.NameConstraints)
def encode_name_constraints(value: values.NameConstraints) -> bytes:
    params = {}
    if value.permitted_subtrees is not None:
        params['permitted_subtrees'] = _subtrees(value.permitted_subtrees)
    if value.excluded_subtrees is not None:
        params['excluded_subtrees'] = _subtrees(value.excluded_subtrees)
    return sequence(x509.NameConstraints, params).dump()


@register('policy_constraints', value_type=values.PolicyConstraints)
def encode_policy_constraints(value: values.PolicyConstraints) -> bytes:
    params = {}
    if value.require_explicit_policy is not None:
        params['require_explicit_policy'] = der_uint(
            value.require_explicit_policy
        )
    if value.inhibit_policy_mapping is not None:
        params['inhibit_policy_mapping'] = der_uint(
            value.inhibit_policy_mapping
        )
    return sequence(x509.PolicyConstraints, params).dump()


@register('inhibit_any_policy', value_type=values.InhibitAnyPolicy)
def encode_inhibit_any_policy(value: values.InhibitAnyPolicy) -> bytes:
    return der_uint(value.skip_certs).dump()


@register(
    'extended_key_usage', 'acceptable_responses',
    value_type=values.ObjectIdentifierSequence
)
def encode_oid_sequence(value: values.ObjectIdentifierSequence) -> bytes:
    return ObjectIdentifiers(
        [core.ObjectIdentifier(oid) for oid in value.oids]
    ).dump()


@register('tls_feature', value_type=values.TLSFeature)
def encode_tls_feature(value: values.TLSFeature) -> bytes:
    return TLSFeatures([der_uint(f.value) for f in value.features]).dump()


@register(
    'subject_alt_name', 'issuer_alt_name', 'certificate_issuer',
    value_type=values.GeneralNames
)
def encode_general_names_extension(value: values.GeneralNames) -> bytes:
    return encode_general_names(value.names).dump()


@register(
    'authority_information_access', 'subject_information_access',
    value_type=values.AccessDescriptions
)
def encode_access_descriptions(value: values.AccessDescriptions) -> bytes:
    return x509.AuthorityInfoAccessSyntax([
        x509.AccessDescription({
            'access_method': descr.access_method,
            'access_location': encode_general_name(descr.access_location),
        })
        for descr in value.descriptions
    ]).dump()


def _uint16(length: int, what: str) -> bytes:
    try:
        return struct.pack('>H', length)
    except struct.error as e:
        raise ExtensionEncodingError(
            f"{what} length {length} does not fit in 16 bits"
        ) from e


@register(
    'precert_signed_certificate_timestamps',
    'signed_certificate_timestamps',
    value_type=values.SignedCertificateTimestamps
)
def encode_scts(value: values.SignedCertificateTimestamps) -> bytes:
    """
    Pack SCTs into a ``SignedCertificateTimestampList`` (RFC 6962, § 3.3),
    and wrap the result in an OCTET STRING.
    """
    body = b''.join(_uint16(len(sct), 'SCT') + sct for sct in value.scts)
    return core.OctetString(_uint16(len(body), 'SCT list') + body).dump()


CRL_REASON_CODES = {
    values.ReasonFlag.UNSPECIFIED: 0,
    values.ReasonFlag.KEY_COMPROMISE: 1,
    values.ReasonFlag.CA_COMPROMISE: 2,
    values.ReasonFlag.AFFILIATION_CHANGED: 3,
    values.ReasonFlag.SUPERSEDED: 4,
    values.ReasonFlag.CESSATION_OF_OPERATION: 5,
    values.ReasonFlag.CERTIFICATE_HOLD: 6,
    # 7 is not used
    values.ReasonFlag.REMOVE_FROM_CRL: 8,
    values.ReasonFlag.PRIVILEGE_WITHDRAWN: 9,
    values.ReasonFlag.AA_COMPROMISE: 10,
}


@register('crl_reason', value_type=values.CRLReason)
def encode_crl_reason(value: values.CRLReason) -> bytes:
    try:
        code = CRL_REASON_CODES[value.reason]
    except KeyError as e:
        raise UnrecognizedEnumerationError(
            f"No reason code for {value.reason!r}"
        ) from e
    return crl.CRLReason(code).dump()


@register('invalidity_date', value_type=values.InvalidityDate)
def encode_invalidity_date(value: values.InvalidityDate) -> bytes:
    return generalized_time(value.invalidity_date).dump()


@register(
    'crl_number', 'delta_crl_indicator', value_type=values.CRLNumber
)
def encode_crl_number(value: values.CRLNumber) -> bytes:
    return der_uint(value.crl_number).dump()


@register('ocsp_nonce', value_type=values.OCSPNonce)
def encode_ocsp_nonce(value: values.OCSPNonce) -> bytes:
    return core.OctetString(value.nonce).dump()


_NULL = core.Null().dump()


@register('ocsp_no_check', value_type=values.OCSPNoCheck)
def encode_ocsp_no_check(value: values.OCSPNoCheck) -> bytes:
    return _NULL


@register('precert_poison', value_type=values.PrecertPoison)
def encode_precert_poison(value: values.PrecertPoison) -> bytes:
    return _NULL


@register('ms_certificate_template', value_type=values.MSCertificateTemplate)
def encode_ms_certificate_template(
        value: values.MSCertificateTemplate) -> bytes:
    params = {'template_id': value.template_id}
    if value.major_version is not None:
        params['major_version'] = der_uint(value.major_version)
    if value.minor_version is not None:
        params['minor_version'] = der_uint(value.minor_version)
    return MSCertificateTemplate(params).dump()
