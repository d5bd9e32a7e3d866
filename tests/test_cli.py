"""
Tests for the command-line interface
"""

import json

import pytest

from messagesig_sdk.cli import main, parse_header_args


@pytest.fixture
def key_file(tmp_path, rsa_private_pem):
    path = tmp_path / 'client.pem'
    path.write_text(rsa_private_pem)
    return str(path)


class TestParseHeaderArgs:
    """Test -H argument parsing"""
    
    def test_headers(self):
        assert parse_header_args(['Content-Type: application/json', 'X-Id:7']) == {
            'Content-Type': 'application/json',
            'X-Id': '7',
        }
    
    def test_invalid_header(self):
        with pytest.raises(ValueError):
            parse_header_args(['no-colon'])


class TestSignCommand:
    """Test the sign subcommand"""
    
    def test_sign_with_body(self, key_file, capsys):
        code = main([
            'sign', 'post', 'https://api.example.com/api/data',
            '--key-file', key_file,
            '--key-id', 'client-key-1',
            '-H', 'Content-Type: application/json',
            '--data', '{"name": "test"}',
        ])
        
        headers = json.loads(capsys.readouterr().out)
        assert code == 0
        assert headers['Content-Digest'].startswith('sha-256=:')
        assert headers['Signature-Input'].startswith(
            'sig1=("@method" "@target-uri" "@authority" "content-digest");keyid="client-key-1";alg="rsa-pss-sha512"'
        )
        assert headers['Signature'].startswith('sig1=:')
    
    def test_custom_components(self, key_file, capsys):
        code = main([
            'sign', 'GET', 'https://api.example.com/',
            '--key-file', key_file, '--key-id', 'k',
            '--algorithm', 'rsa-v1_5-sha256',
            '--component', '@method', '--component', '@path',
        ])
        
        headers = json.loads(capsys.readouterr().out)
        assert code == 0
        assert headers['Signature-Input'].startswith('sig1=("@method" "@path");keyid="k";alg="rsa-v1_5-sha256"')
    
    def test_missing_key_file(self, tmp_path, capsys):
        code = main(['sign', 'GET', 'https://api.example.com/', '--key-file', str(tmp_path / 'nope.pem'), '--key-id', 'k'])
        
        assert code == 1
        assert 'Error reading key file' in capsys.readouterr().err
    
    def test_relative_url(self, key_file, capsys):
        code = main(['sign', 'GET', '/relative', '--key-file', key_file, '--key-id', 'k'])
        
        assert code == 1
        assert 'Error signing request' in capsys.readouterr().err


class TestParseCommand:
    """Test the parse subcommand"""
    
    def test_parse_both_headers(self, capsys):
        code = main([
            'parse',
            '--signature-input', 'sig1=("@method");keyid="k";alg="rsa-pss-sha512";created=1704067200',
            '--signature', 'sig1=:dGVzdA==:',
        ])
        
        output = json.loads(capsys.readouterr().out)
        assert code == 0
        assert output['signature_input'][0]['keyid'] == 'k'
        assert output['signature_input'][0]['created'] == 1704067200
        assert output['signature'] == [{'label': 'sig1', 'length': 4, 'hex': '74657374'}]
    
    def test_nothing_to_parse(self, capsys):
        assert main(['parse']) == 1


class TestMisc:
    """Test other commands"""
    
    def test_algorithms(self, capsys):
        assert main(['algorithms']) == 0
        assert capsys.readouterr().out.split() == ['rsa-pss-sha512', 'rsa-v1_5-sha256']
    
    def test_no_command(self, capsys):
        assert main([]) == 1
