"""
Configuration layer: extension specifications loaded from YAML.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import List, Optional

import yaml
from asn1crypto import core, x509

from .config_utils import (
    ConfigurableMixin,
    ConfigurationError,
    parse_hex_bytes,
)
from .dispatch import encode_extension
from .oids import extension_name, resolve_extension_id
from .registry import extension_encoder_registry
from .values import ExtensionValue

__all__ = ['ExtensionSpec', 'ExtensionSet']

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtensionSpec(ConfigurableMixin):
    """Specifies the value of an extension."""

    id: str
    """
    ID of the extension, as a dotted OID. In the configuration, the names
    in :data:`.EXTENSION_OIDS` can be used as well.
    """

    critical: bool = False
    """Indicates whether the extension is critical or not."""

    value: Optional[ExtensionValue] = None
    """The value of the extension."""

    der_bytes: Optional[bytes] = None
    """
    Raw DER encoding of the extension value, for extensions that
    certoscribe doesn't know how to encode. Must be omitted if :attr:`value`
    is present.
    """

    def __post_init__(self):
        if not isinstance(self.critical, bool):
            raise TypeError("Extension criticality must be a boolean")
        if (self.value is None) == (self.der_bytes is None):
            raise ValueError(
                f"Exactly one of 'value' and 'der-bytes' must be provided "
                f"for extension '{self.name}'."
            )
        if self.value is None:
            return
        binding = extension_encoder_registry.lookup(self.id)
        if binding is None:
            raise ValueError(
                f"There is no encoder for extension '{self.id}'; "
                f"provide 'der-bytes' instead."
            )
        if not isinstance(self.value, binding.value_type):
            raise TypeError(
                f"Extension '{self.name}' takes a value of type "
                f"{binding.value_type.__name__}, "
                f"not {type(self.value).__name__}."
            )

    @property
    def name(self) -> str:
        return extension_name(self.id)

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        try:
            extn_id = resolve_extension_id(config_dict['id'])
        except KeyError:
            raise ConfigurationError(
                "'id' is required in extension dictionaries"
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(str(e)) from e
        config_dict['id'] = extn_id

        try:
            config_dict['der_bytes'] = parse_hex_bytes(
                config_dict['der_bytes'], 'DER bytes'
            )
            return
        except KeyError:
            pass

        binding = extension_encoder_registry.lookup(extn_id)
        if binding is None:
            # the constructor will complain
            return
        value = config_dict.get('value', None)
        if value is None and dataclasses.fields(binding.value_type):
            # only value-less extensions (e.g. OCSP no-check) may omit 'value'
            raise ConfigurationError(
                f"Extension '{extension_name(extn_id)}' requires a 'value' "
                f"or 'der-bytes' entry."
            )
        if not isinstance(value, ExtensionValue):
            config_dict['value'] = binding.value_type.from_config(value)

    def encode(self) -> bytes:
        """
        Return the DER-encoded extension value.
        """
        if self.der_bytes is not None:
            return self.der_bytes
        return encode_extension(self.id, self.value)

    def to_asn1(self) -> x509.Extension:
        return x509.Extension({
            'extn_id': self.id,
            'critical': self.critical,
            'extn_value': core.ParsableOctetString(self.encode()),
        })


@dataclass(frozen=True)
class ExtensionSet(ConfigurableMixin):
    """A list of extensions, encoded together as an ``Extensions`` value."""

    extensions: List[ExtensionSpec]

    unique_extensions: bool = True
    """
    Refuse to encode more than one extension with the same ID.
    ``True`` by default.
    """

    def __post_init__(self):
        if not self.unique_extensions:
            return
        seen = set()
        for ext in self.extensions:
            if ext.id in seen:
                raise ValueError(f"Duplicate extension '{ext.name}'")
            seen.add(ext.id)

    @classmethod
    def process_entries(cls, config_dict):
        super().process_entries(config_dict)
        ext_specs = config_dict.get('extensions', ())
        if not isinstance(ext_specs, (list, tuple)):
            raise ConfigurationError("Extensions must be specified as a list.")

        def _process(sett):
            if isinstance(sett, ExtensionSpec):
                return sett
            try:
                return ExtensionSpec.from_config(sett)
            except ConfigurationError as e:
                ext_id = sett.get('id') if isinstance(sett, dict) else None
                raise ConfigurationError(
                    f"Error in configuration for extension '{ext_id}': {e}"
                ) from e

        config_dict['extensions'] = [_process(sett) for sett in ext_specs]

    @classmethod
    def from_yaml(cls, yaml_str: str) -> 'ExtensionSet':
        try:
            cfg = yaml.safe_load(yaml_str)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse YAML: {e}") from e
        if not isinstance(cfg, dict):
            raise ConfigurationError(
                "Extension configuration must be a dictionary"
            )
        return cls.from_config(cfg)

    @classmethod
    def from_file(cls, cfg_path) -> 'ExtensionSet':
        logger.info(f"Loading extension configuration from {cfg_path}...")
        with open(cfg_path, 'r', encoding='utf-8') as inf:
            return cls.from_yaml(inf.read())

    def to_asn1(self) -> x509.Extensions:
        result = []
        for ext in self.extensions:
            logger.debug(f"Encoding extension '{ext.name}'...")
            result.append(ext.to_asn1())
        return x509.Extensions(result)

    def dump(self) -> bytes:
        return self.to_asn1().dump()
