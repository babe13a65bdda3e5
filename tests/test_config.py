import pytest
import yaml
from asn1crypto import x509

from certoscribe import values
from certoscribe.config import ExtensionSet, ExtensionSpec
from certoscribe.config_utils import ConfigurationError
from tests.conftest import TEST_DATA_PATH


def test_load_extension_set():
    ext_set = ExtensionSet.from_file(str(TEST_DATA_PATH / 'extensions.yml'))
    assert ext_set.unique_extensions
    exts = {ext.name: ext for ext in ext_set.extensions}
    assert exts['basic_constraints'].critical
    assert exts['basic_constraints'].value == values.BasicConstraints(
        ca=True, path_length=0
    )
    assert not exts['key_usage'].value.digital_signature
    assert exts['key_usage'].value.key_cert_sign
    assert exts['ocsp_no_check'].value == values.OCSPNoCheck()
    assert exts['1.2.3.4'].der_bytes == b'\x05\x00'
    assert exts['1.2.3.4'].value is None


def test_extension_set_der():
    ext_set = ExtensionSet.from_file(str(TEST_DATA_PATH / 'extensions.yml'))
    parsed = x509.Extensions.load(ext_set.dump())
    assert len(parsed) == len(ext_set.extensions)
    by_id = {ext['extn_id'].dotted: ext for ext in parsed}

    bc = by_id['2.5.29.19']
    assert bc['critical'].native
    assert bc['extn_value'].parsed.native == {
        'ca': True, 'path_len_constraint': 0
    }
    ku = by_id['2.5.29.15']
    assert ku['extn_value'].parsed.native == {'key_cert_sign', 'crl_sign'}
    assert not by_id['2.5.29.14']['critical'].native
    assert by_id['2.5.29.14']['extn_value'].parsed.native == b'\xab\xcd'
    eku = by_id['2.5.29.37']['extn_value'].parsed.native
    assert eku == ['server_auth', 'client_auth']
    assert by_id['1.2.3.4']['extn_value'].native == b'\x05\x00'
    assert by_id['1.3.6.1.4.1.311.21.7']['extn_value'].contents == \
        bytes.fromhex('300a06022a03020164020102')


def test_extension_order_preserved():
    ext_set = ExtensionSet.from_file(str(TEST_DATA_PATH / 'extensions.yml'))
    parsed = x509.Extensions.load(ext_set.dump())
    assert [ext['extn_id'].dotted for ext in parsed] == \
        [ext.id for ext in ext_set.extensions]


def test_extension_spec_from_config():
    spec = ExtensionSpec.from_config(
        yaml.safe_load(
            """
            id: "2.5.29.21"
            value: certificate_hold
            """
        )
    )
    assert spec.id == '2.5.29.21'
    assert spec.name == 'crl_reason'
    assert not spec.critical
    assert spec.encode() == b'\x0a\x01\x06'
    ext = spec.to_asn1()
    assert ext.dump() == b'\x30\x0a\x06\x03\x55\x1d\x15\x04\x03\x0a\x01\x06'


def test_extension_spec_raw_bytes():
    spec = ExtensionSpec(id='1.2.3.4', critical=True, der_bytes=b'\x05\x00')
    assert spec.encode() == b'\x05\x00'
    ext = spec.to_asn1()
    assert ext['critical'].native
    assert ext['extn_value'].native == b'\x05\x00'


def test_extension_spec_direct():
    spec = ExtensionSpec(
        id='2.5.29.19', value=values.BasicConstraints(ca=True)
    )
    assert spec.encode() == b'\x30\x03\x01\x01\xff'


@pytest.mark.parametrize(
    'config_str, err_msg',
    [
        ('critical: true', "'id' is required"),
        ('id: no_such_extension', 'neither a known extension'),
        ('id: "1.2.3.4"', "Exactly one of 'value' and 'der-bytes'"),
        ('{id: "1.2.3.4", value: 1}', 'no encoder'),
        ('{id: key_usage, der-bytes: "0500", value: [crl_sign]}',
         "Exactly one of"),
        ('{id: key_usage, der-bytes: xyz}', 'hexadecimal'),
        ('{id: key_usage, valeu: [crl_sign]}', 'Unexpected key'),
        ('{id: key_usage, value: [bogus]}', 'Unexpected key'),
        ('{id: basic_constraints, critical: maybe, value: {}}', 'criticality'),
        ('{id: ms_certificate_template}', "requires a 'value'"),
        ('{id: key_usage, critical: true}', "requires a 'value'"),
        ('{id: basic_constraints, value: null}', "requires a 'value'"),
        ('{id: ms_certificate_template, value: {}}', 'template_id'),
    ],
)
def test_extension_spec_errors(config_str, err_msg):
    with pytest.raises(ConfigurationError, match=err_msg):
        ExtensionSpec.from_config(yaml.safe_load(config_str))


@pytest.mark.parametrize(
    'extn_id, value_type',
    [
        ('ocsp_no_check', values.OCSPNoCheck),
        ('precert_poison', values.PrecertPoison),
    ],
)
def test_extension_spec_without_value(extn_id, value_type):
    spec = ExtensionSpec.from_config({'id': extn_id, 'critical': True})
    assert spec.value == value_type()
    assert spec.encode() == b'\x05\x00'


def test_extension_spec_empty_value():
    # an explicitly empty value is fine for types with optional fields
    spec = ExtensionSpec.from_config({'id': 'basic_constraints', 'value': {}})
    assert spec.value == values.BasicConstraints()
    assert spec.encode() == b'\x30\x00'


def test_extension_spec_wrong_value_type():
    with pytest.raises(TypeError, match='takes a value of type KeyUsage'):
        ExtensionSpec(id='2.5.29.15', value=values.BasicConstraints())


def test_duplicate_extensions():
    config = {
        'extensions': [
            {'id': 'basic_constraints', 'value': {'ca': True}},
            {'id': '2.5.29.19', 'value': {'ca': False}},
        ]
    }
    with pytest.raises(ConfigurationError, match='Duplicate extension'):
        ExtensionSet.from_config(dict(config))
    ext_set = ExtensionSet.from_config(
        dict(config, **{'unique-extensions': False})
    )
    assert len(ext_set.extensions) == 2


@pytest.mark.parametrize(
    'config_str, err_msg',
    [
        ('[]', 'must be a dictionary'),
        ('extensions: [', 'Failed to parse YAML'),
        ('extensions: abc', 'as a list'),
        ('extensions: [{id: key_usage, value: [x]}]', "extension 'key_usage'"),
        ('extensions: []\nfoo: bar', 'Unexpected key'),
    ],
)
def test_extension_set_errors(config_str, err_msg):
    with pytest.raises(ConfigurationError, match=err_msg):
        ExtensionSet.from_yaml(config_str)


def test_empty_extension_set():
    ext_set = ExtensionSet.from_yaml('extensions: []')
    assert ext_set.dump() == b'\x30\x00'
