from .config import ExtensionSet, ExtensionSpec
from .dispatch import encode_extension
from .errors import (
    ExtensionEncodingError,
    MalformedIntegerError,
    NonASCIIError,
    UnrecognizedEnumerationError,
)
from .registry import extension_encoder_registry
from . import values
from .values import *

__all__ = [
    'encode_extension',
    'extension_encoder_registry',
    'ExtensionSpec',
    'ExtensionSet',
    'ExtensionEncodingError',
    'NonASCIIError',
    'MalformedIntegerError',
    'UnrecognizedEnumerationError',
]
__all__ += values.__all__
