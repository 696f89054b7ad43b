import pytest
from forth.forth_serialize import serialize, deserialize, detect_format

def test_json_roundtrip():
    s = serialize([1, -2, 3], fmt="json")
    assert s == "[1, -2, 3]"
    assert deserialize(s) == [1, -2, 3]  # JSON is sniffed from leading "["

def test_yaml_flow_and_block():
    assert serialize([1, 2], fmt="yaml") == "[1, 2]\n"
    block = serialize([1, 2], fmt="yaml", pretty=True)
    assert block == "- 1\n- 2\n"
    assert deserialize(block) == [1, 2]

def test_deserialize_bytes_and_content_type():
    assert deserialize(b"[7]", content_type="application/json") == [7]
    assert deserialize("- 5\n", content_type="application/x-yaml") == [5]

def test_empty_document_is_empty_stack():
    assert deserialize("") == []
    assert deserialize("[]") == []

@pytest.mark.parametrize(
    "text",
    [
        '{"a": 1}',
        "[true]",
        "[1.5]",
        '["1"]',
        "[2147483648]",
        "[1, 2",
    ],
)
def test_deserialize_rejects_non_stacks(text):
    with pytest.raises(ValueError):
        deserialize(text)

def test_unsupported_format():
    with pytest.raises(ValueError):
        serialize([1], fmt="xml")
    with pytest.raises(ValueError):
        deserialize("[1]", fmt="xml")

def test_serialize_validates_values():
    with pytest.raises(ValueError):
        serialize([2**40], fmt="json")

@pytest.mark.parametrize(
    "ct,hint,expected",
    [
        ("application/json", None, "json"),
        ("application/x-yaml", None, "yaml"),
        ("application/yaml", None, "yaml"),
        (None, "  [1, 2]", "json"),
        (None, "- 1", "yaml"),
        (None, "", None),
        (None, None, None),
    ],
)
def test_detect_format(ct, hint, expected):
    assert detect_format(ct, hint) == expected
