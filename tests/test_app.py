import struct

import pytest

from flykit.app import Args, IpPort, encode_reading, parse_ip_port, parse_options


def test_parse_options_collects_pairs():
    assert parse_options(["--cx=1.2.3.4:5", "--mode=fast"]) == {
        "cx": "1.2.3.4:5",
        "mode": "fast",
    }


def test_parse_options_first_occurrence_wins():
    assert parse_options(["--k=first", "--k=second"]) == {"k": "first"}


def test_parse_options_splits_on_first_equals():
    assert parse_options(["--a=b=c"]) == {"a": "b=c"}


@pytest.mark.parametrize("argument", ["cx=1", "--cx", "--=x", "--cx=", "-cx=1"])
def test_parse_options_rejects_invalid(argument):
    with pytest.raises(ValueError, match="invalid argument"):
        parse_options([argument])


def test_parse_options_empty():
    assert parse_options([]) == {}


def test_parse_ip_port_octets_and_port():
    result = parse_ip_port("10.0.0.1:8080")
    assert result.octets == (10, 0, 0, 1)
    assert result.port == 8080


def test_parse_ip_port_round_trips_through_str():
    text = "192.168.7.42:2221"
    assert str(parse_ip_port(text)) == text


def test_from_octets_matches_parse():
    assert IpPort.from_octets(127, 0, 0, 1, 9000) == parse_ip_port("127.0.0.1:9000")


@pytest.mark.parametrize(
    "text",
    ["", "1.2.3:4", "1.2.3.4", "a.b.c.d:1", "1.2.3.4:", "256.0.0.1:1", "1.2.3.4:70000"],
)
def test_parse_ip_port_rejects_invalid(text):
    with pytest.raises(ValueError, match="invalid address"):
        parse_ip_port(text)


def test_ip_port_rejects_out_of_range():
    with pytest.raises(ValueError):
        IpPort(0, -1)


def test_args_default_ctrl_addr():
    assert Args({}).ctrl_addr() == IpPort(0, 2221)


def test_args_ctrl_addr_from_option():
    args = Args(parse_options(["--cx=10.1.2.3:4000"]))
    assert args.ctrl_addr() == parse_ip_port("10.1.2.3:4000")


def test_args_invalid_ctrl_addr():
    with pytest.raises(ValueError):
        Args({"cx": "nowhere"}).ctrl_addr()


def test_encode_reading_order_and_size():
    data = encode_reading((1.0, 2.0, 3.0), (4.0, 5.0, 6.0))
    assert len(data) == 24
    assert struct.unpack("<6f", data) == (3.0, 2.0, 1.0, 6.0, 5.0, 4.0)


def test_encode_reading_requires_three_axes():
    with pytest.raises(ValueError):
        encode_reading((1.0, 2.0), (4.0, 5.0, 6.0))