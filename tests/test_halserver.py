import pytest

from flykit.halserver import (
    LogBit,
    ServerSettings,
    get_config,
    parse_log_bits,
    settings_from_config,
)


def test_log_bit_values():
    names = ["LB_DUMP_MSG_RAW", "LB_DUMP_MSG_PROTO", "LB_DUMP_MSG_SOCK"]
    assert [int(parse_log_bits(name)) for name in names] == [1, 2, 4]


def test_parse_log_bits_combines_names():
    result = parse_log_bits("LB_DUMP_MSG_RAW, LB_DUMP_MSG_SOCK")
    assert result == LogBit.DUMP_MSG_RAW | LogBit.DUMP_MSG_SOCK


def test_parse_log_bits_ignores_unknown_and_empty():
    assert parse_log_bits("LB_NOPE,,LB_DUMP_MSG_PROTO") == LogBit.DUMP_MSG_PROTO
    assert parse_log_bits("") == LogBit(0)


def test_parse_log_bits_trims_only_spaces():
    assert parse_log_bits("\tLB_DUMP_MSG_RAW") == LogBit(0)
    assert parse_log_bits("   LB_DUMP_MSG_RAW   ") == LogBit.DUMP_MSG_RAW


def test_parse_log_bits_all():
    spec = ",".join(f"LB_{bit.name}" for bit in LogBit)
    assert parse_log_bits(spec) == LogBit.DUMP_MSG_RAW | LogBit.DUMP_MSG_PROTO | LogBit.DUMP_MSG_SOCK


def test_get_config_prefers_dashed_entry():
    config = {"log.level": "2", "--log.level": "5"}
    assert get_config(config, "log.level", int) == 5


def test_get_config_plain_entry():
    assert get_config({"log.level": "3"}, "log.level", int) == 3


def test_get_config_missing():
    assert get_config({}, "log.level", int) is None


def test_get_config_conversion_error():
    with pytest.raises(ValueError):
        get_config({"log.level": "high"}, "log.level", int)


def test_settings_defaults():
    assert settings_from_config({}) == ServerSettings(
        config_file="halserver.cfg", log_bits=LogBit(0), logful=False, log_level=None
    )


def test_settings_from_values():
    config = {
        "--config": "other.cfg",
        "log.bit": "LB_DUMP_MSG_PROTO",
        "log.ful": "1",
        "--log.level": "4",
    }
    settings = settings_from_config(config)
    assert settings.config_file == "other.cfg"
    assert settings.log_bits == LogBit.DUMP_MSG_PROTO
    assert settings.logful is True
    assert settings.log_level == 4


def test_settings_logful_zero_is_off():
    assert settings_from_config({"log.ful": "0"}).logful is False


def test_settings_rejects_negative_level():
    with pytest.raises(ValueError):
        settings_from_config({"log.level": "-1"})