import pytest

from tfdoc.converter.vartypes import decode_var_type, friendly_type_name
from tfdoc.errors import VarTypeError
from tfdoc.models import Attribute, TypedValue


@pytest.mark.parametrize("expression, expected", [
    ("string", "string"),
    ("number", "number"),
    ("bool", "bool"),
    ("any", "dynamic"),
    ("list(string)", "list of string"),
    ("set( number )", "set of number"),
    ("map(list(bool))", "map of list of bool"),
    ("list(object({ name = string, port = number }))", "list of object"),
    ("object({\n  name = string\n})", "object"),
    ("tuple([string, number])", "tuple"),
    ('"string"', "string"),
    ('"list"', "list of string"),
])
def test_friendly_type_name(expression, expected):
    assert friendly_type_name(expression) == expected


@pytest.mark.parametrize("expression", ["strnig", "list()", "frob(string)", ""])
def test_invalid_type_constraints(expression):
    with pytest.raises(VarTypeError):
        friendly_type_name(expression)


def test_quoted_type_from_string_value():
    attribute = Attribute(name="type", value=TypedValue.of("map"), raw='"map"')
    assert decode_var_type(attribute) == "map of string"


def test_bare_type_from_raw_expression():
    attribute = Attribute(name="type", value=TypedValue.unknown(), raw="map(number)")
    assert decode_var_type(attribute) == "map of number"


def test_missing_expression():
    with pytest.raises(VarTypeError):
        decode_var_type(Attribute(name="type"))
