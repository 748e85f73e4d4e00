import pytest

from benstruct.decoder import decode
from benstruct.errors import InvalidEncoding, WrongFieldType
from benstruct.structure import BencodeDict, BencodeInt, BencodeList, BencodeString


def test_equality_is_structural():
    assert BencodeInt(1) == BencodeInt(1)
    assert BencodeInt(1) != BencodeInt(2)
    assert BencodeString(b"1") != BencodeInt(1)
    assert BencodeList([BencodeInt(1), BencodeInt(2)]) != BencodeList([BencodeInt(2), BencodeInt(1)])
    assert BencodeInt(1) != 1


def test_dict_equality_ignores_order():
    a = BencodeDict({b"x": BencodeInt(1), b"y": BencodeInt(2)})
    b = BencodeDict({b"y": BencodeInt(2), b"x": BencodeInt(1)})
    assert a == b
    assert list(a) != list(b)


def test_spans_do_not_affect_equality():
    assert decode(b"li1ee") == BencodeList([BencodeInt(1)])
    assert BencodeList([]).span is None


def test_values_are_immutable():
    obj = decode(b"d1:ali1eee")
    with pytest.raises(AttributeError):
        obj.value = {}
    with pytest.raises(AttributeError):
        obj["a"].span = None
    with pytest.raises(TypeError):
        obj.value[b"b"] = BencodeInt(1)
    assert isinstance(obj["a"].value, tuple)


def test_construction_copies_input():
    items = [BencodeInt(1)]
    lst = BencodeList(items)
    items.append(BencodeInt(2))
    assert len(lst) == 1


def test_construction_type_checks():
    with pytest.raises(TypeError):
        BencodeInt("1")
    with pytest.raises(TypeError):
        BencodeInt(True)
    with pytest.raises(TypeError):
        BencodeString("text")
    with pytest.raises(TypeError):
        BencodeList([1, 2])
    with pytest.raises(TypeError):
        BencodeDict({b"a": 1})
    with pytest.raises(TypeError):
        BencodeDict({1: BencodeInt(1)})
    with pytest.raises(ValueError):
        BencodeDict({b"\xff": BencodeInt(1)})


def test_dict_accepts_str_and_bytes_keys():
    d = BencodeDict({"name": BencodeString(b"x")})
    assert b"name" in d
    assert "name" in d
    assert d["name"] == d[b"name"]
    assert d.get("missing") is None
    assert list(d.keys()) == [b"name"]


def test_hashing():
    assert hash(BencodeInt(3)) == hash(BencodeInt(3))
    assert len({BencodeString(b"a"), BencodeString(b"a")}) == 1
    assert hash(BencodeList([BencodeInt(1)])) == hash(BencodeList([BencodeInt(1)]))
    with pytest.raises(TypeError):
        hash(BencodeDict({}))


def test_typed_accessors():
    d = decode(b"d1:ai7e1:b3:xyz1:cle1:ddee")
    assert d["a"].as_int() == 7
    assert d["b"].as_bytes() == b"xyz"
    assert d["b"].as_text() == "xyz"
    assert d["c"].as_list() == ()
    assert d["d"].as_dict() == BencodeDict({})
    assert d.as_dict() is d


def test_accessor_mismatch_raises_wrong_field_type():
    with pytest.raises(WrongFieldType) as exc:
        BencodeString(b"7").as_int("piece length")
    assert exc.value.field == "piece length"
    assert exc.value.expected == "integer"
    assert exc.value.actual == "byte string"
    assert "'piece length'" in str(exc.value)

    with pytest.raises(WrongFieldType):
        BencodeInt(1).as_text()
    with pytest.raises(WrongFieldType):
        BencodeDict({}).as_list()
    with pytest.raises(WrongFieldType):
        BencodeList([]).as_dict()
    with pytest.raises(WrongFieldType):
        BencodeList([]).as_bytes()


def test_as_text_rejects_invalid_utf8():
    with pytest.raises(InvalidEncoding) as exc:
        BencodeString(b"\xff\xfe").as_text("announce")
    assert exc.value.field == "announce"
    assert isinstance(exc.value.__cause__, UnicodeDecodeError)


def test_to_python():
    obj = decode(b"d1:ali1e2:bce1:bi-2ee")
    assert obj.to_python() == {b"a": [1, b"bc"], b"b": -2}


def test_repr():
    assert repr(BencodeInt(5)) == "BencodeInt(5)"
    assert repr(BencodeString(b"ab")) == "BencodeString(b'ab')"


def test_int_range_enforced_on_construction():
    assert BencodeInt(2**63 - 1).value == 2**63 - 1
    assert BencodeInt(-2**63).value == -2**63
    with pytest.raises(ValueError):
        BencodeInt(2**63)
    with pytest.raises(ValueError):
        BencodeInt(-2**63 - 1)
