import hashlib

import pytest

from corvid.sha1 import SHA1, left_rotate


@pytest.mark.parametrize("length", [0, 1, 3, 55, 56, 57, 63, 64, 65, 119, 120, 128, 1000])
def test_digest_matches_reference(length):
    data = bytes((i * 7 + 3) & 0xFF for i in range(length))
    assert SHA1(data).digest() == hashlib.sha1(data).digest()


def test_known_vector_abc():
    assert SHA1(b"abc").hexdigest() == "a9993e364706816aba3e25717850c26c9cd0d89d"


def test_incremental_updates_equal_one_shot():
    data = b"The quick brown fox jumps over the lazy dog" * 5
    hasher = SHA1()
    for piece in (data[:10], data[10:77], data[77:]):
        hasher.update(piece)
    assert hasher.digest() == SHA1(data).digest()


def test_update_returns_self_for_chaining():
    hasher = SHA1()
    assert hasher.update(b"ab").update(b"c").hexdigest() == hashlib.sha1(b"abc").hexdigest()


def test_digest_is_repeatable_and_does_not_disturb_state():
    hasher = SHA1(b"hello ")
    first = hasher.digest()
    assert hasher.digest() == first
    hasher.update(b"world")
    assert hasher.digest() == hashlib.sha1(b"hello world").digest()


def test_reset_clears_input():
    hasher = SHA1(b"something")
    hasher.reset()
    assert hasher.digest() == hashlib.sha1(b"").digest()


def test_digest_length_and_hex_form():
    hasher = SHA1(b"data")
    assert len(hasher.digest()) == 20
    assert hasher.hexdigest() == hasher.digest().hex()


def test_str_input_rejected():
    with pytest.raises(TypeError):
        SHA1().update("text")


def test_left_rotate_wraps_high_bit():
    assert left_rotate(0x80000000, 1) == 1


def test_left_rotate_full_cycle_is_identity():
    value = 0x12345678
    assert left_rotate(left_rotate(value, 12), 20) == value
    assert left_rotate(value, 0) == value


def test_left_rotate_stays_in_32_bits():
    assert left_rotate(0xFFFFFFFF, 7) == 0xFFFFFFFF