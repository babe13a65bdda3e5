"""
Registry mapping extension OIDs to encoder functions.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Optional, Type

from .config_utils import ConfigurationError
from .oids import EXTENSION_NAMES, resolve_extension_id
from .values import ExtensionValue

__all__ = [
    'EncoderBinding', 'ExtensionEncoderRegistry', 'extension_encoder_registry',
]

logger = logging.getLogger(__name__)

EncoderFunc = Callable[[ExtensionValue], bytes]


@dataclass(frozen=True)
class EncoderBinding:
    """Binding of an extension OID to an encoder and its value type."""

    extn_id: str
    """Dotted OID of the extension."""

    value_type: Type[ExtensionValue]
    """The type of value that the encoder accepts."""

    encoder: EncoderFunc
    """Function producing the DER-encoded ``extnValue`` content."""

    @property
    def name(self) -> str:
        return EXTENSION_NAMES.get(self.extn_id, self.extn_id)


class ExtensionEncoderRegistry:
    """
    Registry of extension encoders.
    """

    def __init__(self):
        self._dict: Dict[str, EncoderBinding] = {}

    def register(self, *extn_ids: str, value_type: Type[ExtensionValue]):
        """
        Register an encoder function for one or more extensions.
        Meant to be used as a decorator.

        :param extn_ids:
            Extension names or dotted OIDs.
        :param value_type:
            The subclass of :class:`.ExtensionValue` the encoder takes.
        """
        if not extn_ids:
            raise ConfigurationError("No extension IDs to register")
        if not (
            isinstance(value_type, type)
            and issubclass(value_type, ExtensionValue)
        ):
            raise ConfigurationError(
                "Encoders must declare a value type that is a subclass of "
                "ExtensionValue."
            )
        dotted_ids = [resolve_extension_id(extn_id) for extn_id in extn_ids]

        def _register(encoder: EncoderFunc) -> EncoderFunc:
            for dotted in dotted_ids:
                if dotted in self._dict:
                    raise ConfigurationError(
                        f"An encoder for '{dotted}' is already registered."
                    )
                self._dict[dotted] = EncoderBinding(
                    extn_id=dotted, value_type=value_type, encoder=encoder
                )
                logger.debug(
                    f"Registered encoder {encoder.__name__} for {dotted}"
                )
            return encoder

        return _register

    def lookup(self, extn_id) -> Optional[EncoderBinding]:
        """
        Look up the encoder for an extension.

        :param extn_id:
            Extension name, dotted OID or ``asn1crypto`` object identifier.
        :return:
            The binding, or ``None`` if there is no encoder for the
            extension.
        """
        return self._dict.get(resolve_extension_id(extn_id))

    def __contains__(self, extn_id) -> bool:
        return self.lookup(extn_id) is not None

    def __iter__(self) -> Iterator[EncoderBinding]:
        return iter(self._dict.values())

    def __len__(self):
        return len(self._dict)


extension_encoder_registry = ExtensionEncoderRegistry()
"""
The default extension encoder registry.
"""
