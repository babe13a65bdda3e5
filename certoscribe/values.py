"""
Extension values.

Each class in this module describes the content of one family of X.509,
CRL or OCSP extensions. Values are immutable and checked when they are
created, so the encoders in :mod:`certoscribe.encoders` can rely on
well-typed input.

Optional fields use ``None`` to indicate that they are absent. Lists are
stored as tuples; an empty tuple is *not* the same as ``None``, since
DER distinguishes between an absent field and an empty SEQUENCE OF.

All values can also be instantiated from configuration dictionaries (as
loaded from YAML) through
:meth:`~certoscribe.config_utils.ConfigurableMixin.from_config`.
"""

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, FrozenSet, Optional, Tuple, Union

from asn1crypto import ocsp, x509

from .config_utils import (
    ConfigurableMixin,
    ConfigurationError,
    parse_hex_bytes,
    parse_timestamp,
)
from .errors import UnrecognizedEnumerationError
from .names import (
    GeneralName,
    NameAttribute,
    general_names_from_config,
    relative_name_from_config,
)
from .oids import is_dotted_oid, unmap_oid

__all__ = [
    'ReasonFlag', 'TLSFeatureType', 'ExtensionValue',
    'BasicConstraints', 'KeyUsage', 'SubjectKeyIdentifier',
    'AuthorityKeyIdentifier', 'DistributionPoint', 'DistributionPoints',
    'IssuingDistributionPoint', 'NoticeReference', 'UserNotice',
    'PolicyInformation', 'CertificatePolicies', 'NameConstraints',
    'PolicyConstraints', 'InhibitAnyPolicy', 'ObjectIdentifierSequence',
    'TLSFeature', 'GeneralNames', 'AccessDescription', 'AccessDescriptions',
    'SignedCertificateTimestamps', 'CRLReason', 'InvalidityDate',
    'CRLNumber', 'OCSPNonce', 'OCSPNoCheck', 'PrecertPoison',
    'MSCertificateTemplate',
]

UINT16_MAX = 0xFFFF
UINT32_MAX = 0xFFFFFFFF


@enum.unique
class ReasonFlag(enum.Enum):
    """
    Revocation reasons. All of them can be used as a CRL entry reason code,
    but ``unspecified`` and ``remove_from_crl`` have no place in
    the reason flags of a distribution point.
    """

    UNSPECIFIED = 'unspecified'
    KEY_COMPROMISE = 'key_compromise'
    CA_COMPROMISE = 'ca_compromise'
    AFFILIATION_CHANGED = 'affiliation_changed'
    SUPERSEDED = 'superseded'
    CESSATION_OF_OPERATION = 'cessation_of_operation'
    CERTIFICATE_HOLD = 'certificate_hold'
    REMOVE_FROM_CRL = 'remove_from_crl'
    PRIVILEGE_WITHDRAWN = 'privilege_withdrawn'
    AA_COMPROMISE = 'aa_compromise'


NOT_A_REASON_FLAG = frozenset(
    {ReasonFlag.UNSPECIFIED, ReasonFlag.REMOVE_FROM_CRL}
)


@enum.unique
class TLSFeatureType(enum.Enum):
    """TLS extension code points allowed in the TLS feature extension."""

    STATUS_REQUEST = 5
    STATUS_REQUEST_V2 = 17


def _where(obj, fname):
    return f"{type(obj).__name__}.{fname}"


def _check_bool(obj, *fnames):
    for fname in fnames:
        if not isinstance(getattr(obj, fname), bool):
            raise TypeError(f"{_where(obj, fname)} must be a boolean")


def _check_uint(obj, fname, *, optional=False, max_value=None):
    value = getattr(obj, fname)
    if value is None and optional:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{_where(obj, fname)} must be an integer")
    if value < 0:
        raise ValueError(f"{_where(obj, fname)} must not be negative")
    if max_value is not None and value > max_value:
        raise ValueError(f"{_where(obj, fname)} must not exceed {max_value}")


def _check_bytes(obj, fname, *, optional=False):
    value = getattr(obj, fname)
    if value is None and optional:
        return
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{_where(obj, fname)} must be a byte string")
    object.__setattr__(obj, fname, bytes(value))


def _check_str(obj, fname, *, optional=False):
    value = getattr(obj, fname)
    if value is None and optional:
        return
    if not isinstance(value, str):
        raise TypeError(f"{_where(obj, fname)} must be a string")


def _check_oid(obj, fname, *, optional=False):
    value = getattr(obj, fname)
    if value is None and optional:
        return
    if not is_dotted_oid(value):
        raise ValueError(f"{_where(obj, fname)} must be a dotted OID")


def _freeze_list(obj, fname, item_type, *, optional=False):
    value = getattr(obj, fname)
    if value is None:
        if optional:
            return
        raise TypeError(f"{_where(obj, fname)} is required")
    if isinstance(value, (str, bytes, dict)):
        raise TypeError(f"{_where(obj, fname)} must be a list")
    try:
        items = tuple(value)
    except TypeError as e:
        raise TypeError(f"{_where(obj, fname)} must be a list") from e
    for item in items:
        if not isinstance(item, item_type):
            raise TypeError(
                f"Unexpected entry of type {type(item).__name__} "
                f"in {_where(obj, fname)}"
            )
    object.__setattr__(obj, fname, items)


def _freeze_names(obj, fname, *, optional=False):
    _freeze_list(obj, fname, GeneralName, optional=optional)
    for name in getattr(obj, fname) or ():
        _check_not_ip_network(obj, fname, name)


def _check_not_ip_network(obj, fname, name: GeneralName):
    # CIDR ranges are only meaningful in name constraints
    if name.is_ip_network:
        raise ValueError(
            f"{_where(obj, fname)} must contain IP addresses, "
            f"not address ranges; '{name.value}' is a range."
        )


def _coerce_reason(value) -> ReasonFlag:
    if isinstance(value, ReasonFlag):
        return value
    try:
        return ReasonFlag(value)
    except ValueError as e:
        raise UnrecognizedEnumerationError(
            f"'{value}' is not a recognised revocation reason"
        ) from e


def _check_reason_flags(obj, fname):
    value = getattr(obj, fname)
    if value is None:
        return
    if isinstance(value, (str, ReasonFlag)):
        raise TypeError(f"{_where(obj, fname)} must be a set of reasons")
    reasons = frozenset(_coerce_reason(r) for r in value)
    bad = reasons & NOT_A_REASON_FLAG
    if bad:
        raise ValueError(
            f"{', '.join(sorted(r.value for r in bad))} cannot be used "
            f"in {_where(obj, fname)}"
        )
    object.__setattr__(obj, fname, reasons)


def _process_dp_name_entries(config_dict, *reason_keys):
    # shared by DistributionPoint and IssuingDistributionPoint
    for key in ('full_name', 'crl_issuer'):
        try:
            config_dict[key] = general_names_from_config(config_dict[key])
        except KeyError:
            pass
    try:
        config_dict['relative_name'] = relative_name_from_config(
            config_dict['relative_name']
        )
    except KeyError:
        pass
    for key in reason_keys:
        try:
            reasons = config_dict[key]
        except KeyError:
            continue
        if not isinstance(reasons, list):
            raise ConfigurationError("Reasons must be specified as a list")
        config_dict[key] = frozenset(reasons)


@dataclass(frozen=True)
class ExtensionValue(ConfigurableMixin):
    """
    Base class for extension values.

    Subclasses with a single (principal) field can name it in
    :attr:`_shorthand_field`; configuration that isn't a dictionary will
    then be used as the value of that field.
    """

    _shorthand_field: ClassVar[Optional[str]] = None

    @classmethod
    def from_config(cls, config_dict):
        if config_dict is None:
            config_dict = {}
        elif (
            not isinstance(config_dict, dict)
            and cls._shorthand_field is not None
        ):
            config_dict = {cls._shorthand_field: config_dict}
        return super().from_config(config_dict)


@dataclass(frozen=True)
class BasicConstraints(ExtensionValue):
    """Basic constraints extension (RFC 5280, § 4.2.1.9)."""

    ca: bool = False
    """Whether the subject is a CA."""

    path_length: Optional[int] = None
    """
    Maximal number of intermediate CAs that may follow. Only meaningful for
    CAs, but not enforced.
    """

    def __post_init__(self):
        _check_bool(self, 'ca')
        _check_uint(self, 'path_length', optional=True)


KEY_USAGE_BITS = (
    'digital_signature',
    'content_commitment',
    'key_encipherment',
    'data_encipherment',
    'key_agreement',
    'key_cert_sign',
    'crl_sign',
    'encipher_only',
    'decipher_only',
)


@dataclass(frozen=True)
class KeyUsage(ExtensionValue):
    """
    Key usage extension (RFC 5280, § 4.2.1.3).

    ``encipher_only`` and ``decipher_only`` are ignored unless
    ``key_agreement`` is set.
    """

    digital_signature: bool = False
    content_commitment: bool = False
    key_encipherment: bool = False
    data_encipherment: bool = False
    key_agreement: bool = False
    key_cert_sign: bool = False
    crl_sign: bool = False
    encipher_only: bool = False
    decipher_only: bool = False

    def __post_init__(self):
        _check_bool(self, *KEY_USAGE_BITS)

    @classmethod
    def from_config(cls, config_dict):
        # a list of usages is more natural to write down
        if isinstance(config_dict, (list, tuple, set)):
            config_dict = {
                str(usage).replace('-', '_'): True for usage in config_dict
            }
        return super().from_config(config_dict)


@dataclass(frozen=True)
class SubjectKeyIdentifier(ExtensionValue):
    """Subject key identifier extension (RFC 5280, § 4.2.1.2)."""

    _shorthand_field = 'digest'

    digest: bytes

    def __post_init__(self):
        _check_bytes(self, 'digest')

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        try:
            config_dict['digest'] = parse_hex_bytes(
                config_dict['digest'], 'digest'
            )
        except KeyError:
            pass


@dataclass(frozen=True)
class AuthorityKeyIdentifier(ExtensionValue):
    """Authority key identifier extension (RFC 5280, § 4.2.1.1)."""

    key_identifier: Optional[bytes] = None
    authority_cert_issuer: Optional[Tuple[GeneralName, ...]] = None
    authority_cert_serial_number: Optional[int] = None

    def __post_init__(self):
        _check_bytes(self, 'key_identifier', optional=True)
        _freeze_names(self, 'authority_cert_issuer', optional=True)
        _check_uint(self, 'authority_cert_serial_number', optional=True)

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        try:
            config_dict['key_identifier'] = parse_hex_bytes(
                config_dict['key_identifier'], 'key-identifier'
            )
        except KeyError:
            pass
        try:
            config_dict['authority_cert_issuer'] = general_names_from_config(
                config_dict['authority_cert_issuer']
            )
        except KeyError:
            pass


@dataclass(frozen=True)
class DistributionPoint(ConfigurableMixin):
    """
    A single distribution point.

    If both :attr:`full_name` and :attr:`relative_name` are set, only the
    full name ends up in the encoded value.
    """

    full_name: Optional[Tuple[GeneralName, ...]] = None
    relative_name: Optional[Tuple[NameAttribute, ...]] = None
    reasons: Optional[FrozenSet[ReasonFlag]] = None
    crl_issuer: Optional[Tuple[GeneralName, ...]] = None

    def __post_init__(self):
        _freeze_names(self, 'full_name', optional=True)
        _freeze_list(self, 'relative_name', NameAttribute, optional=True)
        _check_reason_flags(self, 'reasons')
        _freeze_names(self, 'crl_issuer', optional=True)

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        _process_dp_name_entries(config_dict, 'reasons')


@dataclass(frozen=True)
class DistributionPoints(ExtensionValue):
    """CRL distribution points and freshest CRL extensions."""

    _shorthand_field = 'points'

    points: Tuple[DistributionPoint, ...]

    def __post_init__(self):
        _freeze_list(self, 'points', DistributionPoint)

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        try:
            points = config_dict['points']
        except KeyError:
            return
        if not isinstance(points, list):
            raise ConfigurationError(
                "Distribution points must be specified as a list"
            )
        config_dict['points'] = [
            p if isinstance(p, DistributionPoint)
            else DistributionPoint.from_config(p)
            for p in points
        ]


@dataclass(frozen=True)
class IssuingDistributionPoint(ExtensionValue):
    """
    Issuing distribution point CRL extension (RFC 5280, § 5.2.5).

    Name precedence is the same as for :class:`DistributionPoint`.
    """

    full_name: Optional[Tuple[GeneralName, ...]] = None
    relative_name: Optional[Tuple[NameAttribute, ...]] = None
    only_contains_user_certs: bool = False
    only_contains_ca_certs: bool = False
    only_some_reasons: Optional[FrozenSet[ReasonFlag]] = None
    indirect_crl: bool = False
    only_contains_attribute_certs: bool = False

    def __post_init__(self):
        _freeze_names(self, 'full_name', optional=True)
        _freeze_list(self, 'relative_name', NameAttribute, optional=True)
        _check_bool(
            self, 'only_contains_user_certs', 'only_contains_ca_certs',
            'indirect_crl', 'only_contains_attribute_certs'
        )
        _check_reason_flags(self, 'only_some_reasons')

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        _process_dp_name_entries(config_dict, 'only_some_reasons')


@dataclass(frozen=True)
class NoticeReference(ConfigurableMixin):
    organization: str
    notice_numbers: Tuple[int, ...]

    def __post_init__(self):
        _check_str(self, 'organization')
        _freeze_list(self, 'notice_numbers', int)
        for num in self.notice_numbers:
            if isinstance(num, bool) or num < 0:
                raise ValueError(
                    "Notice numbers must be non-negative integers"
                )


@dataclass(frozen=True)
class UserNotice(ConfigurableMixin):
    notice_reference: Optional[NoticeReference] = None
    explicit_text: Optional[str] = None

    def __post_init__(self):
        if self.notice_reference is not None and not isinstance(
            self.notice_reference, NoticeReference
        ):
            raise TypeError(
                "UserNotice.notice_reference must be a NoticeReference"
            )
        _check_str(self, 'explicit_text', optional=True)

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        try:
            ref = config_dict['notice_reference']
            if not isinstance(ref, NoticeReference):
                config_dict['notice_reference'] = (
                    NoticeReference.from_config(ref)
                )
        except KeyError:
            pass


@dataclass(frozen=True)
class PolicyInformation(ConfigurableMixin):
    """
    A certificate policy, with optional qualifiers.
    Qualifiers that are strings are taken to be CPS URIs.
    """

    policy_identifier: str
    policy_qualifiers: Optional[Tuple[Union[str, UserNotice], ...]] = None

    def __post_init__(self):
        _check_oid(self, 'policy_identifier')
        _freeze_list(
            self, 'policy_qualifiers', (str, UserNotice), optional=True
        )

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        try:
            config_dict['policy_identifier'] = unmap_oid(
                x509.PolicyIdentifier, config_dict['policy_identifier']
            )
        except KeyError:
            pass
        except (TypeError, ValueError) as e:
            raise ConfigurationError(str(e)) from e

        try:
            qualifiers = config_dict['policy_qualifiers']
        except KeyError:
            return
        if not isinstance(qualifiers, list):
            raise ConfigurationError(
                "Policy qualifiers must be specified as a list"
            )

        def _qualifier(params):
            if isinstance(params, (str, UserNotice)):
                return params
            return UserNotice.from_config(params)

        config_dict['policy_qualifiers'] = [_qualifier(q) for q in qualifiers]


@dataclass(frozen=True)
class CertificatePolicies(ExtensionValue):
    """Certificate policies extension (RFC 5280, § 4.2.1.4)."""

    _shorthand_field = 'policies'

    policies: Tuple[PolicyInformation, ...]

    def __post_init__(self):
        _freeze_list(self, 'policies', PolicyInformation)

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        try:
            policies = config_dict['policies']
        except KeyError:
            return
        if not isinstance(policies, list):
            raise ConfigurationError("Policies must be specified as a list")
        config_dict['policies'] = [
            p if isinstance(p, PolicyInformation)
            else PolicyInformation.from_config(p)
            for p in policies
        ]


@dataclass(frozen=True)
class NameConstraints(ExtensionValue):
    """
    Name constraints extension (RFC 5280, § 4.2.1.10).

    Subtrees are given as plain general names: the ``minimum`` and
    ``maximum`` fields of the encoded subtrees always take their default
    values, since RFC 5280 doesn't allow anything else.
    """

    permitted_subtrees: Optional[Tuple[GeneralName, ...]] = None
    excluded_subtrees: Optional[Tuple[GeneralName, ...]] = None

    def __post_init__(self):
        _freeze_list(self, 'permitted_subtrees', GeneralName, optional=True)
        _freeze_list(self, 'excluded_subtrees', GeneralName, optional=True)

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        for key in ('permitted_subtrees', 'excluded_subtrees'):
            try:
                config_dict[key] = general_names_from_config(config_dict[key])
            except KeyError:
                pass


@dataclass(frozen=True)
class PolicyConstraints(ExtensionValue):
    """Policy constraints extension (RFC 5280, § 4.2.1.11)."""

    require_explicit_policy: Optional[int] = None
    inhibit_policy_mapping: Optional[int] = None

    def __post_init__(self):
        _check_uint(self, 'require_explicit_policy', optional=True)
        _check_uint(self, 'inhibit_policy_mapping', optional=True)


@dataclass(frozen=True)
class InhibitAnyPolicy(ExtensionValue):
    _shorthand_field = 'skip_certs'

    skip_certs: int

    def __post_init__(self):
        _check_uint(self, 'skip_certs')


@dataclass(frozen=True)
class ObjectIdentifierSequence(ExtensionValue):
    """
    A list of object identifiers. Used for extended key usage and for the
    OCSP acceptable responses extension. Order and duplicates are kept.
    """

    _shorthand_field = 'oids'

    oids: Tuple[str, ...]

    def __post_init__(self):
        _freeze_list(self, 'oids', str)
        for oid in self.oids:
            if not is_dotted_oid(oid):
                raise ValueError(f"'{oid}' is not a dotted OID")

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        try:
            oids = config_dict['oids']
        except KeyError:
            return
        if not isinstance(oids, list):
            raise ConfigurationError("OIDs must be specified as a list")

        def _resolve(value):
            # key purposes and OCSP response types can go by name
            for oid_class in (x509.KeyPurposeId, ocsp.ResponseType):
                try:
                    return unmap_oid(oid_class, value)
                except ValueError:
                    continue
                except TypeError as e:
                    raise ConfigurationError(str(e)) from e
            raise ConfigurationError(
                f"'{value}' is not a dotted OID, a key purpose or an "
                f"OCSP response type."
            )

        config_dict['oids'] = [_resolve(oid) for oid in oids]


@dataclass(frozen=True)
class TLSFeature(ExtensionValue):
    """TLS feature extension (RFC 7633)."""

    _shorthand_field = 'features'

    features: Tuple[TLSFeatureType, ...]

    def __post_init__(self):
        def _coerce(feature):
            if isinstance(feature, TLSFeatureType):
                return feature
            try:
                if isinstance(feature, str):
                    return TLSFeatureType[feature.upper().replace('-', '_')]
                return TLSFeatureType(feature)
            except (KeyError, ValueError) as e:
                raise UnrecognizedEnumerationError(
                    f"'{feature}' is not a supported TLS feature"
                ) from e

        _freeze_list(self, 'features', (TLSFeatureType, str, int))
        object.__setattr__(
            self, 'features', tuple(_coerce(f) for f in self.features)
        )


@dataclass(frozen=True)
class GeneralNames(ExtensionValue):
    """
    A list of general names. Used for the subject and issuer alternative
    name extensions, and the certificate issuer CRL entry extension.
    """

    _shorthand_field = 'names'

    names: Tuple[GeneralName, ...]

    def __post_init__(self):
        _freeze_names(self, 'names')

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        try:
            config_dict['names'] = general_names_from_config(
                config_dict['names']
            )
        except KeyError:
            pass


@dataclass(frozen=True)
class AccessDescription(ConfigurableMixin):
    access_method: str
    access_location: GeneralName

    def __post_init__(self):
        _check_oid(self, 'access_method')
        if not isinstance(self.access_location, GeneralName):
            raise TypeError(
                "AccessDescription.access_location must be a GeneralName"
            )
        _check_not_ip_network(self, 'access_location', self.access_location)

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        try:
            config_dict['access_method'] = unmap_oid(
                x509.AccessMethod, config_dict['access_method']
            )
        except KeyError:
            pass
        except (TypeError, ValueError) as e:
            raise ConfigurationError(str(e)) from e
        try:
            location = config_dict['access_location']
            if not isinstance(location, GeneralName):
                config_dict['access_location'] = GeneralName.from_config(
                    location
                )
        except KeyError:
            pass


@dataclass(frozen=True)
class AccessDescriptions(ExtensionValue):
    """Authority and subject information access extensions."""

    _shorthand_field = 'descriptions'

    descriptions: Tuple[AccessDescription, ...]

    def __post_init__(self):
        _freeze_list(self, 'descriptions', AccessDescription)

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        try:
            descriptions = config_dict['descriptions']
        except KeyError:
            return
        if not isinstance(descriptions, list):
            raise ConfigurationError(
                "Access descriptions must be specified as a list"
            )
        config_dict['descriptions'] = [
            d if isinstance(d, AccessDescription)
            else AccessDescription.from_config(d)
            for d in descriptions
        ]


@dataclass(frozen=True)
class SignedCertificateTimestamps(ExtensionValue):
    """
    A list of serialised SCTs (RFC 6962, § 3.3). The SCTs themselves are
    opaque to certoscribe.
    """

    _shorthand_field = 'scts'

    scts: Tuple[bytes, ...]

    def __post_init__(self):
        _freeze_list(self, 'scts', (bytes, bytearray, memoryview))
        scts = tuple(bytes(sct) for sct in self.scts)
        # each SCT carries a 2-byte length prefix, as does the list
        if sum(len(sct) + 2 for sct in scts) > UINT16_MAX:
            raise ValueError("SCT list too long for TLS-style length prefix")
        object.__setattr__(self, 'scts', scts)

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        try:
            scts = config_dict['scts']
        except KeyError:
            return
        if not isinstance(scts, list):
            raise ConfigurationError("SCTs must be specified as a list")
        config_dict['scts'] = [parse_hex_bytes(sct, 'SCT') for sct in scts]


@dataclass(frozen=True)
class CRLReason(ExtensionValue):
    """Reason code CRL entry extension (RFC 5280, § 5.3.1)."""

    _shorthand_field = 'reason'

    reason: ReasonFlag

    def __post_init__(self):
        object.__setattr__(self, 'reason', _coerce_reason(self.reason))


@dataclass(frozen=True)
class InvalidityDate(ExtensionValue):
    """Invalidity date CRL entry extension (RFC 5280, § 5.3.2)."""

    _shorthand_field = 'invalidity_date'

    invalidity_date: datetime

    def __post_init__(self):
        if not isinstance(self.invalidity_date, datetime):
            raise TypeError(
                "InvalidityDate.invalidity_date must be a datetime"
            )

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        try:
            config_dict['invalidity_date'] = parse_timestamp(
                config_dict['invalidity_date'], 'invalidity date'
            )
        except KeyError:
            pass


@dataclass(frozen=True)
class CRLNumber(ExtensionValue):
    """CRL number and delta CRL indicator extensions."""

    _shorthand_field = 'crl_number'

    crl_number: int

    def __post_init__(self):
        _check_uint(self, 'crl_number')


@dataclass(frozen=True)
class OCSPNonce(ExtensionValue):
    _shorthand_field = 'nonce'

    nonce: bytes

    def __post_init__(self):
        _check_bytes(self, 'nonce')

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        try:
            config_dict['nonce'] = parse_hex_bytes(
                config_dict['nonce'], 'nonce'
            )
        except KeyError:
            pass


@dataclass(frozen=True)
class OCSPNoCheck(ExtensionValue):
    """OCSP no check extension. Carries no data."""
    pass


@dataclass(frozen=True)
class PrecertPoison(ExtensionValue):
    """Precertificate poison extension. Carries no data."""
    pass


@dataclass(frozen=True)
class MSCertificateTemplate(ExtensionValue):
    """Microsoft certificate template extension."""

    template_id: str
    major_version: Optional[int] = None
    minor_version: Optional[int] = None

    def __post_init__(self):
        _check_oid(self, 'template_id')
        _check_uint(self, 'major_version', optional=True, max_value=UINT32_MAX)
        _check_uint(self, 'minor_version', optional=True, max_value=UINT32_MAX)
