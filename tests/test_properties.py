"""Tests for Properties and ConditionalProperties accessors."""

from datetime import timedelta

import pytest

from nginx_reader.errors import EmptyValueError, ValueFormatError
from nginx_reader.model.properties import (
    UNCONDITIONAL,
    ConditionalProperties,
    ConditionalProperty,
    Properties,
)
from nginx_reader.values import TypedAccessors

VALUES = {
    "bool1": "on",
    "bool2": "off",
    "bool3": "auto",
    "numeric1": "441",
    "numeric2": "abc",
    "buffer1": "4 16k",
    "buffer2": "A 16k",
    "size1": "160",
    "size2": "512k",
    "size5": "2J",
    "time1": "230ms",
    "time9": "2d 6h 30m 15s",
    "time10": "3u",
}


@pytest.fixture(params=["plain", "conditional"])
def props(request):
    """The same directives in both kinds of store."""
    if request.param == "plain":
        return Properties({name: [value] for name, value in VALUES.items()})
    return ConditionalProperties(
        [],
        {name: [ConditionalProperty(UNCONDITIONAL, value)] for name, value in VALUES.items()},
    )


def test_get(props):
    assert props.get("bool3") == "auto"
    assert props.get("unknown") == ""


def test_typed_getters(props):
    assert props.get_bool("bool1") is True
    assert props.get_bool("bool2") is False
    assert props.get_int("numeric1") == 441
    assert props.get_buf("buffer1") == (4, 16384)
    assert props.get_size("size1") == 160
    assert props.get_size("size2") == 524288
    assert props.get_time("time1") == timedelta(milliseconds=230)
    assert props.get_time("time9") == timedelta(hours=54, minutes=30, seconds=15)


@pytest.mark.parametrize(
    "getter,name",
    [
        ("get_bool", "bool3"),
        ("get_int", "numeric2"),
        ("get_buf", "buffer2"),
        ("get_size", "size5"),
        ("get_time", "time10"),
    ],
)
def test_typed_getter_errors(props, getter, name):
    with pytest.raises(ValueFormatError):
        getattr(props, getter)(name)


@pytest.mark.parametrize("getter", ["get_bool", "get_int", "get_buf", "get_size", "get_time"])
def test_missing_value(props, getter):
    with pytest.raises(EmptyValueError, match="Value is empty"):
        getattr(props, getter)("unknown")


def test_properties_mapping_interface():
    props = Properties({"listen": ["80", "443 ssl"], "root": ["/srv"]})

    assert "listen" in props
    assert "missing" not in props
    assert len(props) == 2
    assert list(props) == ["listen", "root"]
    assert props["listen"] == ("80", "443 ssl")
    assert props.values_of("missing") == ()
    assert props.get("listen") == "80 443 ssl"
    with pytest.raises(KeyError):
        props["missing"]


def test_properties_are_read_only():
    source = {"listen": ["80"]}
    props = Properties(source)
    source["listen"].append("81")

    assert props["listen"] == ("80",)
    assert not hasattr(props, "__setitem__")


def test_conditional_get_flattens_conditions():
    props = ConditionalProperties(
        ["$https = ''"],
        {
            "return": [
                ConditionalProperty(0, "301 https://$host"),
                ConditionalProperty(UNCONDITIONAL, "200"),
            ]
        },
    )

    assert props.get("return") == "301 https://$host 200"
    assert props.values_for("return") == ("200",)
    assert props.values_for("return", 0) == ("301 https://$host",)
    assert props.conditions == ("$https = ''",)
    assert not props.data["return"][1].is_conditional


def test_time_out_of_range_is_a_value_error():
    store = Properties({"keepalive_timeout": ["3000000y"]})

    with pytest.raises(ValueFormatError, match="out of range"):
        store.get_time("keepalive_timeout")


def test_typed_accessors_require_get():
    with pytest.raises(TypeError):
        TypedAccessors()
