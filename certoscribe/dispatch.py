import logging
from typing import Optional

from . import encoders  # noqa: F401 (populates the registry)
from .errors import ExtensionEncodingError
from .registry import extension_encoder_registry
from .values import ExtensionValue

__all__ = ['encode_extension']

logger = logging.getLogger(__name__)


def encode_extension(extn_id, value: ExtensionValue) -> Optional[bytes]:
    """
    Produce the DER encoding of an extension's ``extnValue`` contents.

    :param extn_id:
        The extension's OID, as a dotted string or an ``asn1crypto`` object
        identifier. Names of known extensions (e.g. ``key_usage``) are also
        accepted.
    :param value:
        The extension value.
    :return:
        The DER-encoded value, or ``None`` if there's no encoder for
        the extension in question.
    :raises TypeError:
        if the value is of the wrong type for the extension.
    :raises ExtensionEncodingError:
        if the value cannot be encoded.
    """
    binding = extension_encoder_registry.lookup(extn_id)
    if binding is None:
        logger.debug(f"No encoder for extension {extn_id}")
        return None

    if not isinstance(value, binding.value_type):
        raise TypeError(
            f"Extension '{binding.name}' takes a value of type "
            f"{binding.value_type.__name__}, not {type(value).__name__}."
        )
    logger.debug(
        f"Encoding extension '{binding.name}' ({binding.extn_id}) "
        f"with {binding.encoder.__name__}"
    )
    try:
        return binding.encoder(value)
    except ExtensionEncodingError:
        raise
    except ValueError as e:
        # asn1crypto rejects some values only when serialising
        # (e.g. malformed IP addresses)
        raise ExtensionEncodingError(
            f"Failed to encode extension '{binding.name}': {e}"
        ) from e
