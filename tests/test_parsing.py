"""
Tests for Signature-Input and Signature header parsing
"""

import base64

from messagesig_sdk.parsing import parse_signature_input, parse_signature, split_signatures


class TestParseSignatureInput:
    """Test Signature-Input parsing"""
    
    def test_single_signature(self):
        header = 'sig1=("@method" "@target-uri");keyid="test-key";alg="rsa-pss-sha512";created=1704067200'
        
        parsed = parse_signature_input(header)
        
        assert len(parsed) == 1
        entry = parsed[0]
        assert entry.label == 'sig1'
        assert entry.components == ['@method', '@target-uri']
        assert entry.keyid == 'test-key'
        assert entry.alg == 'rsa-pss-sha512'
        assert entry.created == 1704067200
        assert entry.expires is None
        assert entry.nonce is None
    
    def test_all_parameters(self):
        header = ('sig1=("@method");keyid="k";alg="rsa-v1_5-sha256"'
                  ';created=100;expires=400;nonce="abc-123"')
        
        entry = parse_signature_input(header)[0]
        
        assert entry.created == 100
        assert entry.expires == 400
        assert entry.nonce == 'abc-123'
    
    def test_parameter_order_is_free(self):
        header = 'sig1=("@path");created=5;alg="rsa-pss-sha512";keyid="k"'
        
        entry = parse_signature_input(header)[0]
        
        assert entry.keyid == 'k'
        assert entry.alg == 'rsa-pss-sha512'
        assert entry.created == 5
    
    def test_multiple_signatures(self):
        header = ('sig1=("@method" "@path");keyid="a";alg="rsa-pss-sha512", '
                  'proxy_sig=("@authority");keyid="b";alg="rsa-v1_5-sha256"')
        
        parsed = parse_signature_input(header)
        
        assert [p.label for p in parsed] == ['sig1', 'proxy_sig']
        assert parsed[1].components == ['@authority']
        assert parsed[1].keyid == 'b'
    
    def test_comma_inside_quotes_does_not_split(self):
        header = 'sig1=("@method");keyid="key,with,commas";alg="rsa-pss-sha512"'
        
        parsed = parse_signature_input(header)
        
        assert len(parsed) == 1
        assert parsed[0].keyid == 'key,with,commas'
    
    def test_empty_component_list(self):
        parsed = parse_signature_input('sig1=();keyid="k";alg="rsa-pss-sha512"')
        assert parsed[0].components == []
    
    def test_missing_keyid_dropped(self):
        header = ('sig1=("@method");alg="rsa-pss-sha512", '
                  'sig2=("@method");keyid="k";alg="rsa-pss-sha512"')
        
        parsed = parse_signature_input(header)
        
        assert [p.label for p in parsed] == ['sig2']
    
    def test_missing_alg_dropped(self):
        assert parse_signature_input('sig1=("@method");keyid="k"') == []
    
    def test_malformed_entries(self):
        assert parse_signature_input('') == []
        assert parse_signature_input('not a signature') == []
        assert parse_signature_input('1sig=("@method");keyid="k";alg="a"') == []
        assert parse_signature_input('sig1="@method";keyid="k";alg="a"') == []


class TestSplitSignatures:
    """Test top-level comma splitting"""
    
    def test_split_respects_parentheses_and_quotes(self):
        header = 'a=("x" "y");keyid="1,2", b=("z")'
        assert [s.strip() for s in split_signatures(header)] == ['a=("x" "y");keyid="1,2"', 'b=("z")']
    
    def test_no_trailing_empty_segment(self):
        assert split_signatures('a=()') == ['a=()']
        assert split_signatures('') == []


class TestParseSignature:
    """Test Signature parsing"""
    
    def test_single_signature(self):
        parsed = parse_signature('sig1=:dGVzdA==:')
        
        assert len(parsed) == 1
        assert parsed[0].label == 'sig1'
        assert parsed[0].value == b'test'
    
    def test_multiple_signatures(self):
        raw = bytes(range(64))
        header = f'sig1=:dGVzdA==:, sig2=:{base64.b64encode(raw).decode()}:'
        
        parsed = parse_signature(header)
        
        assert [p.label for p in parsed] == ['sig1', 'sig2']
        assert parsed[1].value == raw
    
    def test_invalid_base64_skipped(self):
        parsed = parse_signature('sig1=:a:, sig2=:dGVzdA==:')
        
        assert [p.label for p in parsed] == ['sig2']
    
    def test_missing_padding_tolerated(self):
        raw = bytes(range(256))
        unpadded = base64.b64encode(raw).decode().rstrip('=')
        
        parsed = parse_signature(f'sig1=:{unpadded}:')
        
        assert len(parsed) == 1
        assert parsed[0].value == raw
    
    def test_no_signatures(self):
        assert parse_signature('') == []
        assert parse_signature('sig1=dGVzdA==') == []
