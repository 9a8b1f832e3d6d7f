from log4you.log_id import from_log_id, new_log_id, uuid7

HEX_DIGITS = set("0123456789abcdef")


def test_new_log_id_is_32_lowercase_hex():
    log_id = new_log_id()
    assert len(log_id) == 32
    assert set(log_id) <= HEX_DIGITS


def test_uuid7_version_and_variant():
    value = uuid7()
    assert value.version == 7
    assert value.variant == "specified in RFC 4122"


def test_round_trip():
    log_id = new_log_id()
    parsed = from_log_id(log_id)
    assert parsed is not None
    assert parsed.hex == log_id


def test_ids_are_unique():
    ids = {new_log_id() for _ in range(200)}
    assert len(ids) == 200


def test_timestamps_do_not_decrease():
    first = uuid7().int >> 80
    second = uuid7().int >> 80
    assert second >= first


def test_wrong_length_is_rejected():
    assert from_log_id(new_log_id()[:31]) is None
    assert from_log_id(new_log_id() + "0") is None
    assert from_log_id("") is None


def test_non_hex_is_rejected():
    assert from_log_id("z" * 32) is None
    assert from_log_id("-" * 32) is None


def test_uppercase_is_accepted():
    log_id = new_log_id()
    parsed = from_log_id(log_id.upper())
    assert parsed is not None
    assert parsed.hex == log_id