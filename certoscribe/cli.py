import sys
from contextlib import contextmanager

from asn1crypto import pem

import click
import logging

from .config import ExtensionSet
from .config_utils import ConfigurationError
from .errors import ExtensionEncodingError
from .registry import extension_encoder_registry
from .version import __version__

logger = logging.getLogger(__name__)


def _log_config(verbose=False):
    _logger = logging.getLogger('certoscribe')
    _logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


@contextmanager
def exception_manager():
    msg = exc = None
    try:
        yield
    except click.ClickException:
        raise
    except ConfigurationError as e:
        msg = f"Configuration problem: {str(e)}"
        exc = e
    except ExtensionEncodingError as e:
        msg = f"Encoding problem: {str(e)}"
        exc = e

    if exc is not None:
        logger.error(msg, exc_info=exc)
        raise click.ClickException(msg)


def _load_extensions(config) -> ExtensionSet:
    try:
        return ExtensionSet.from_file(config)
    except IOError as e:
        raise click.ClickException(
            f"I/O Error processing config from {config}: {e}",
        ) from e


@click.group()
@click.version_option(prog_name='certoscribe', version=__version__)
@click.option('--verbose', help='enable debug logging',
              required=False, type=bool, is_flag=True)
def cli(verbose):
    _log_config(verbose)


@cli.command(help='encode a list of extensions as an Extensions value')
@click.argument('config', type=click.Path(readable=True, dir_okay=False))
@click.argument('output', type=click.Path(writable=True, dir_okay=False),
                required=False)
@click.option('--ignore-tty', type=bool, is_flag=True,
              help='never try to prevent binary data from being written '
                   'to stdout')
@click.option('--no-pem', help='use raw DER instead of PEM output',
              required=False, type=bool, is_flag=True)
@exception_manager()
def encode(config, output, no_pem, ignore_tty):
    extensions = _load_extensions(config)

    if output is None and no_pem and not ignore_tty and sys.stdout.isatty():
        raise click.ClickException(
            "Refusing to write binary output to a TTY. Pass --ignore-tty if "
            "you really want to ignore this check."
        )
    data = extensions.dump()
    if not no_pem:
        data = pem.armor('X509 EXTENSIONS', data)

    if output is None:
        # we want to write bytes, not strings
        sys.stdout.buffer.write(data)
    else:
        with open(output, 'wb') as f:
            f.write(data)


@cli.command(help='print the encoded value of each extension')
@click.argument('config', type=click.Path(readable=True, dir_okay=False))
@exception_manager()
def show(config):
    extensions = _load_extensions(config)
    for ext in extensions.extensions:
        criticality = 'critical' if ext.critical else 'non-critical'
        click.echo(
            f"{ext.name} ({ext.id}, {criticality}): {ext.encode().hex()}"
        )


@cli.command(name='list-encoders', help='list supported extensions')
def list_encoders():
    for binding in extension_encoder_registry:
        click.echo(
            f"{binding.name} ({binding.extn_id}): "
            f"{binding.value_type.__name__}"
        )
