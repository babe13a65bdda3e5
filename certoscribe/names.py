"""
General names and relative distinguished names, as used by many
extensions.
"""

import ipaddress
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from asn1crypto import core, x509

from .config_utils import (
    ConfigurableMixin,
    ConfigurationError,
    check_config_keys,
    key_dashes_to_underscores,
)
from .errors import NonASCIIError
from .oids import is_dotted_oid, unmap_oid

__all__ = [
    'GeneralName', 'NameAttribute', 'NAME_TYPE_ALIASES',
    'encode_general_name', 'encode_general_names',
    'encode_name_attribute', 'encode_relative_name',
    'general_names_from_config', 'relative_name_from_config',
]

# some convenient aliases
NAME_TYPE_ALIASES = {
    'email': 'rfc822_name',
    'uri': 'uniform_resource_identifier',
    'ip': 'ip_address',
    'dns': 'dns_name',
    'dir': 'directory_name',
    'oid': 'registered_id',
}

SUPPORTED_NAME_TYPES = frozenset({
    'rfc822_name', 'dns_name', 'uniform_resource_identifier',
    'ip_address', 'directory_name', 'registered_id',
})

# these attribute types are PrintableString in RFC 5280, the rest
# are written as UTF8String
PRINTABLE_ATTRIBUTES = frozenset({
    'country_name', 'dn_qualifier', 'serial_number',
})


def _check_attribute_type(attr_type: str) -> str:
    try:
        unmap_oid(x509.NameType, attr_type)
    except (ValueError, TypeError) as e:
        raise ValueError(
            f"'{attr_type}' is not a known name attribute type or a dotted "
            f"OID."
        ) from e
    return attr_type


# these are IA5String-valued, and written out as given
IA5_NAME_TYPES = {
    'rfc822_name': x509.EmailAddress,
    'dns_name': x509.DNSName,
    'uniform_resource_identifier': x509.URI,
}


def _check_ip_address(value: str):
    # name constraints use CIDR notation
    try:
        if '/' in value:
            ipaddress.ip_network(value)
        else:
            ipaddress.ip_address(value)
    except ValueError as e:
        raise ValueError(f"'{value}' is not a valid IP address") from e


@dataclass(frozen=True)
class NameAttribute(ConfigurableMixin):
    """A single attribute type and value, as it appears in an RDN."""

    type: str
    """
    Attribute type, as an ``asn1crypto`` attribute name
    (e.g. ``common_name``) or a dotted OID.
    """

    value: str
    """The attribute value."""

    def __post_init__(self):
        if not isinstance(self.type, str) or not isinstance(self.value, str):
            raise TypeError("Name attribute types and values must be strings")
        object.__setattr__(
            self, 'type', _check_attribute_type(self.type.replace('-', '_'))
        )


@dataclass(frozen=True)
class GeneralName(ConfigurableMixin):
    """
    A general name. Directory names take a mapping from attribute names to
    values, the other name types take a string.
    """

    type: str
    """
    Name type, e.g. ``dns_name`` or ``uniform_resource_identifier``.
    The aliases in :data:`NAME_TYPE_ALIASES` are also accepted.
    """

    value: Union[str, Tuple[Tuple[str, str], ...]]
    """The name's value."""

    def __post_init__(self):
        if not isinstance(self.type, str):
            raise TypeError("General name types must be strings")
        # resolve convenience abbreviations
        name_type = self.type.replace('-', '_')
        name_type = NAME_TYPE_ALIASES.get(name_type, name_type)
        if name_type not in SUPPORTED_NAME_TYPES:
            raise ValueError(f"Unsupported general name type '{self.type}'")
        object.__setattr__(self, 'type', name_type)

        value = self.value
        if name_type == 'directory_name':
            if isinstance(value, Mapping):
                value = tuple(value.items())
            elif isinstance(value, str) or not isinstance(value, Iterable):
                raise TypeError(
                    "Directory names must be given as a mapping of "
                    "attribute names to values."
                )
            value = tuple(
                (_check_attribute_type(k.replace('-', '_')), v)
                for k, v in value
            )
            object.__setattr__(self, 'value', value)
        elif not isinstance(value, str):
            raise TypeError(
                f"Values for general names of type {name_type} must be "
                f"strings, not {type(value).__name__}."
            )
        elif name_type == 'registered_id' and not is_dotted_oid(value):
            raise ValueError(f"'{value}' is not a dotted OID")
        elif name_type == 'ip_address':
            _check_ip_address(value)
        elif name_type in IA5_NAME_TYPES and not value.isascii():
            raise NonASCIIError(
                f"Values for general names of type {name_type} must be "
                f"ASCII-strings."
            )

    @property
    def is_ip_network(self) -> bool:
        """
        Whether this is an IP address range in CIDR notation, which only
        makes sense as a name constraint subtree.
        """
        return self.type == 'ip_address' and '/' in self.value

    @classmethod
    def from_config(cls, config_dict):
        check_config_keys('general name', ('type', 'value'), config_dict)
        try:
            name_type = config_dict['type']
            value = config_dict['value']
        except KeyError:
            raise ConfigurationError(
                "A general name should be specified as a dictionary with a "
                "'type' key and a 'value' key."
            )
        if isinstance(value, dict):
            value = key_dashes_to_underscores(value)
        try:
            return cls(type=name_type, value=value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(str(e)) from e


def encode_name_attribute(attr: NameAttribute) -> x509.NameTypeAndValue:
    attr_type = x509.NameType.map(attr.type)
    if attr_type == 'email_address':
        value = x509.EmailAddress(attr.value)
    elif attr_type == 'domain_component':
        value = x509.DNSName(attr.value)
    elif attr_type in PRINTABLE_ATTRIBUTES:
        value = x509.DirectoryString(
            name='printable_string', value=core.PrintableString(attr.value)
        )
    else:
        value = x509.DirectoryString(
            name='utf8_string', value=core.UTF8String(attr.value)
        )
    return x509.NameTypeAndValue({'type': attr_type, 'value': value})


def encode_relative_name(
    attrs: Iterable[NameAttribute],
) -> x509.RelativeDistinguishedName:
    # asn1crypto sorts SET OF members on output, as DER requires
    return x509.RelativeDistinguishedName(
        [encode_name_attribute(attr) for attr in attrs]
    )


def encode_general_name(name: GeneralName) -> x509.GeneralName:
    if name.type == 'directory_name':
        value = x509.Name.build(dict(name.value))
    elif name.type in IA5_NAME_TYPES:
        # setting the contents directly skips asn1crypto's normalisation
        # (lowercasing, IDNA and IRI conversion)
        value = IA5_NAME_TYPES[name.type](
            contents=name.value.encode('ascii')
        )
    else:
        value = name.value
    return x509.GeneralName(name=name.type, value=value)


def encode_general_names(names: Iterable[GeneralName]) -> x509.GeneralNames:
    return x509.GeneralNames([encode_general_name(n) for n in names])


def general_names_from_config(params) -> List[GeneralName]:
    if not isinstance(params, list):
        raise ConfigurationError(
            "General names should be specified as a list"
        )
    return [
        p if isinstance(p, GeneralName) else GeneralName.from_config(p)
        for p in params
    ]


def relative_name_from_config(params) -> List[NameAttribute]:
    """
    Relative names can be given as a dictionary of attribute names and
    values, or as a list of ``type``/``value`` dictionaries (which
    allows repeated attribute types).
    """
    if isinstance(params, dict):
        params = [
            {'type': k, 'value': v}
            for k, v in key_dashes_to_underscores(params).items()
        ]
    if not isinstance(params, list):
        raise ConfigurationError(
            "Relative names should be specified as a dictionary or a list"
        )
    return [
        p if isinstance(p, NameAttribute) else NameAttribute.from_config(p)
        for p in params
    ]
