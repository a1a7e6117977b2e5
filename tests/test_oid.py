import pytest

from gitchat.oid import InvalidObjectIdError, git_oid_to_str, git_str_to_oid

SAMPLE = "0123456789abcdef0123456789abcdef01234567"


def test_round_trip_lower_case():
    assert git_oid_to_str(git_str_to_oid(SAMPLE)) == SAMPLE


def test_raw_id_has_twenty_bytes():
    assert len(git_str_to_oid(SAMPLE)) == 20


def test_zero_id():
    assert git_str_to_oid("0" * 40) == bytes(20)


def test_upper_case_accepted_and_formatted_lower():
    oid = git_str_to_oid(SAMPLE.upper())
    assert oid == git_str_to_oid(SAMPLE)
    assert git_oid_to_str(oid) == SAMPLE


def test_trailing_text_ignored():
    assert git_str_to_oid(SAMPLE + " commit 123\n") == git_str_to_oid(SAMPLE)


def test_bytes_round_trip():
    raw = bytes(range(20))
    assert git_str_to_oid(git_oid_to_str(raw)) == raw


@pytest.mark.parametrize("text", ["g" * 40, SAMPLE[:39] + "z", SAMPLE[:20], ""])
def test_invalid_text_raises(text):
    with pytest.raises(InvalidObjectIdError):
        git_str_to_oid(text)


def test_wrong_length_oid_raises():
    with pytest.raises(InvalidObjectIdError):
        git_oid_to_str(bytes(19))