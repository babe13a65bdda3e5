import re

import pytest
from asn1crypto import pem, x509
from click.testing import CliRunner

from certoscribe.cli import cli
from certoscribe.oids import EXTENSION_OIDS
from tests.conftest import TEST_DATA_PATH

CONFIG_PATH = str(TEST_DATA_PATH / "extensions.yml")


@pytest.fixture(scope="function", autouse=True)
def cli_runner():
    runner = CliRunner()
    with runner.isolated_filesystem():
        yield runner


def test_version(cli_runner):
    result = cli_runner.invoke(cli, ['--version'])
    m = re.match(r"^certoscribe, version \d+\.\d+\.\d+", result.output)
    assert m is not None


def test_encode_pem(cli_runner):
    result = cli_runner.invoke(cli, ['encode', CONFIG_PATH, 'out.pem'])
    assert not result.exit_code, result.output
    with open('out.pem', 'rb') as inf:
        label, _, der = pem.unarmor(inf.read())
    assert label == 'X509 EXTENSIONS'
    exts = x509.Extensions.load(der)
    assert exts[0]['extn_id'].native == 'basic_constraints'
    assert exts[0]['critical'].native


def test_encode_der(cli_runner):
    result = cli_runner.invoke(
        cli, ['encode', '--no-pem', CONFIG_PATH, 'out.der']
    )
    assert not result.exit_code, result.output
    with open('out.der', 'rb') as inf:
        exts = x509.Extensions.load(inf.read())
    assert exts[-1]['extn_id'].dotted == '1.2.3.4'
    assert exts[-1]['extn_value'].native == b'\x05\x00'


def test_encode_stdout(cli_runner):
    result = cli_runner.invoke(cli, ['encode', CONFIG_PATH])
    assert not result.exit_code, result.output
    assert result.stdout_bytes.startswith(b'-----BEGIN X509 EXTENSIONS-----')


def test_show(cli_runner):
    result = cli_runner.invoke(cli, ['show', CONFIG_PATH])
    assert not result.exit_code, result.output
    lines = result.output.splitlines()
    assert 'basic_constraints (2.5.29.19, critical): 30060101ff020100' \
        in lines
    assert 'key_usage (2.5.29.15, critical): 03020106' in lines
    assert 'subject_key_identifier (2.5.29.14, non-critical): 0402abcd' \
        in lines
    assert '1.2.3.4 (1.2.3.4, non-critical): 0500' in lines


def test_list_encoders(cli_runner):
    result = cli_runner.invoke(cli, ['list-encoders'])
    assert not result.exit_code, result.output
    lines = result.output.splitlines()
    assert len(lines) == len(EXTENSION_OIDS)
    assert 'tls_feature (1.3.6.1.5.5.7.1.24): TLSFeature' in lines
    assert 'freshest_crl (2.5.29.46): DistributionPoints' in lines


def test_config_error(cli_runner):
    with open('bad.yml', 'w') as outf:
        outf.write('extensions:\n  - id: key_usage\n    value: [bogus]\n')
    result = cli_runner.invoke(cli, ['encode', 'bad.yml', 'out.pem'])
    assert result.exit_code == 1
    assert 'Configuration problem' in result.output


def test_encoding_error(cli_runner):
    with open('bad.yml', 'w', encoding='utf-8') as outf:
        outf.write(
            'extensions:\n'
            '  - id: certificate_policies\n'
            '    value:\n'
            '      - policy-identifier: "1.2.3"\n'
            '        policy-qualifiers: ["http://é"]\n'
        )
    result = cli_runner.invoke(cli, ['show', 'bad.yml'])
    assert result.exit_code == 1
    assert 'Encoding problem: Qualifier must be an ASCII-string.' \
        in result.output


def test_missing_config(cli_runner):
    result = cli_runner.invoke(cli, ['encode', 'nonexistent.yml'])
    assert result.exit_code == 1
    assert 'I/O Error' in result.output
