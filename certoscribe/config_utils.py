"""
This module contains utilities for allowing dataclasses to be populated by
user-provided configuration (e.g. from a Yaml file).

.. note::
    On naming conventions: this module converts hyphens in key names to
    underscores as a matter of course.
"""

import binascii
import dataclasses
from datetime import datetime

import tzlocal
from dateutil.parser import parse as parse_dt

__all__ = [
    'ConfigurationError', 'ConfigurableMixin', 'check_config_keys',
    'key_dashes_to_underscores', 'parse_hex_bytes',
    'parse_timestamp',
]


class ConfigurationError(ValueError):
    """Signal configuration errors."""
    pass


def key_dashes_to_underscores(config_dict):
    return {
        key.replace('-', '_'): v for key, v in config_dict.items()
    }


@dataclasses.dataclass(frozen=True)
class ConfigurableMixin:
    """General configuration mixin for dataclasses"""

    @classmethod
    def process_entries(cls, config_dict):
        """
        Hook method that can modify the configuration dictionary
        to overwrite or tweak some of their values (e.g. to convert string
        parameters into more complex Python objects)

        Subclasses that override this method should call
        ``super().process_entries()``, and leave keys that they do not
        recognise untouched.

        :param config_dict:
            A dictionary containing configuration values.
        :raises ConfigurationError:
            when there is a problem processing a relevant entry.
        """
        pass

    @classmethod
    def from_config(cls, config_dict):
        """
        Attempt to instantiate an object of the class on which it is called,
        by means of the configuration settings passed in.

        First, we check that the keys supplied in the dictionary correspond
        to data fields on the current class.
        Then, the dictionary is processed using the :meth:`process_entries`
        method. The resulting dictionary is passed to the initialiser
        of the current class as a kwargs dict.

        :param config_dict:
            A dictionary containing configuration values.
        :return:
            An instance of the class on which it is called.
        :raises ConfigurationError:
            when an unexpected configuration key is encountered or left
            unfilled, or when there is a problem processing one of the config
            values.
        """
        check_config_keys(
            cls.__name__, {f.name for f in dataclasses.fields(cls)},
            config_dict
        )
        # in Python we need underscores
        config_dict = key_dashes_to_underscores(config_dict)
        cls.process_entries(config_dict)
        try:
            # noinspection PyArgumentList
            return cls(**config_dict)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid configuration for {cls.__name__}: {e}"
            ) from e


def check_config_keys(config_name, expected_keys, config_dict):
    # wrapper function to provide user-friendly errors
    #  (mainly intended for the CLI)
    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            f"{config_name} requires a dictionary to initialise."
        )
    # standardise on dashes for the yaml interface
    provided_keys = {key.replace('_', '-') for key in config_dict.keys()}
    expected_keys = {key.replace('_', '-') for key in expected_keys}
    if not (provided_keys <= expected_keys):
        unexpected_keys = provided_keys - expected_keys
        # this is easier to present to the user than a TypeError
        raise ConfigurationError(
            f"Unexpected {'key' if len(unexpected_keys) == 1 else 'keys'} "
            f"in configuration for {config_name}: "
            f"{','.join(key.replace('_', '-') for key in sorted(unexpected_keys))}."
        )


def parse_hex_bytes(value, what='value') -> bytes:
    """
    Parse a hexadecimal string into bytes. Colons and whitespace are
    ignored, so fingerprint-style notation (``ab:cd:ef``) works too.
    """
    if isinstance(value, bytes):
        return value
    if not isinstance(value, str):
        raise ConfigurationError(
            f"{what} must be specified as a hexadecimal string, "
            f"not {type(value).__name__}."
        )
    cleaned = ''.join(value.replace(':', '').split())
    try:
        return binascii.unhexlify(cleaned)
    except (ValueError, binascii.Error) as e:
        raise ConfigurationError(
            f"{what} must be a valid hexadecimal string, not '{value}'."
        ) from e


def parse_timestamp(value, what='timestamp') -> datetime:
    """
    Parse an ISO 8601 timestamp. The special value ``now`` evaluates to the
    current time in the local timezone.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ConfigurationError(
            f"{what} must be specified as an ISO 8601 string, "
            f"not {type(value).__name__}."
        )
    if value.strip().lower() == 'now':
        return datetime.now(tz=tzlocal.get_localzone())
    try:
        return parse_dt(value)
    except (ValueError, OverflowError) as e:
        raise ConfigurationError(
            f"Illegal date-time string '{value}' for {what}."
        ) from e
