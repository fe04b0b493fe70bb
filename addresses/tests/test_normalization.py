"""Tests for input normalization helpers."""
import pytest
from ..utils.normalization import clean_field, coerce_bool, normalize_code

def test_clean_field():
    """Test whitespace collapsing for text fields."""
    assert clean_field('  12   Main St ') == '12 Main St'
    assert clean_field('Suite\t400') == 'Suite 400'
    assert clean_field(98101) == '98101'
    assert clean_field('') is None
    assert clean_field('   ') is None
    assert clean_field(None) is None

def test_normalize_code():
    assert normalize_code(' us ') == 'US'
    assert normalize_code('On') == 'ON'
    assert normalize_code('') is None
    assert normalize_code(None) is None

@pytest.mark.parametrize('value', [True, 1, '1', 'true', 'TRUE', 'on', 'yes', ' Y '])
def test_coerce_bool_true(value):
    assert coerce_bool(value) is True

@pytest.mark.parametrize('value', [False, 0, None, '0', 'false', 'off', 'no', ''])
def test_coerce_bool_false(value):
    assert coerce_bool(value) is False

def test_coerce_bool_rejects_garbage():
    with pytest.raises(ValueError):
        coerce_bool('sometimes')
