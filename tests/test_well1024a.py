"""Generator tests: construction, snapshot/replay and the WELL1024a recurrence."""

import numpy as np
import pytest

from well_rng import InvalidStateLength, OsEntropy, Well1024aRng


@pytest.mark.parametrize("length", [0, 10, 31, 33])
def test_load_rejects_wrong_length(length):
    with pytest.raises(InvalidStateLength) as excinfo:
        Well1024aRng.load([0] * length)

    assert excinfo.value.expected == 32
    assert excinfo.value.actual == length
    assert str(length) in str(excinfo.value)


@pytest.mark.parametrize("length", [0, 31, 33])
def test_constructor_enforces_state_length(length):
    with pytest.raises(InvalidStateLength) as excinfo:
        Well1024aRng([5] * length)
    assert excinfo.value.actual == length


def test_constructor_copies_and_masks_state():
    state = [2 ** 32 + 9] * 32
    rng = Well1024aRng(state)
    rng.next_u32()

    assert state == [2 ** 32 + 9] * 32
    assert Well1024aRng(state).snapshot() == [9] * 32


def test_invalid_state_length_is_value_error():
    with pytest.raises(ValueError):
        Well1024aRng.load([])


def test_load_accepts_exactly_32_words():
    rng = Well1024aRng.load(range(32))
    assert rng.index == 0


def test_immediate_round_trip():
    state = list(range(32))
    assert Well1024aRng.load(state).snapshot() == state


def test_load_copies_input():
    state = [7] * 32
    rng = Well1024aRng.load(state)
    rng.next_u32()
    assert state == [7] * 32


def test_snapshot_is_pure_read():
    rng = Well1024aRng.from_seed(99)
    rng.next_u32()
    first = rng.snapshot()
    second = rng.snapshot()
    assert first == second
    first[0] ^= 1
    assert rng.snapshot() == second


def test_snapshot_length_invariant(fixed_entropy):
    generators = [
        Well1024aRng.from_seed(5),
        Well1024aRng.from_entropy(fixed_entropy),
        Well1024aRng.from_entropy(),
        Well1024aRng.load(range(32)),
    ]
    for rng in generators:
        for _ in range(45):
            assert len(rng.snapshot()) == 32
            rng.next_u32()


def test_weak_seed_expansion():
    assert Well1024aRng.from_seed(1000).snapshot() == list(range(1000, 1032))


def test_seed_expansion_wraps():
    expected = [4294967295] + list(range(31))
    assert Well1024aRng.from_seed(4294967295).snapshot() == expected


def test_seed_is_reduced_to_32_bits():
    assert Well1024aRng.from_seed(2 ** 32 + 3).snapshot() == Well1024aRng.from_seed(3).snapshot()


def test_first_draw_from_all_ones(all_ones):
    rng = Well1024aRng.load(all_ones)

    assert rng.next_u32() == 0x08084801
    assert rng.index == 31
    assert rng.snapshot() == [0x08084801, 0x00084000] + [1] * 30


def test_second_draw_from_all_ones(all_ones):
    rng = Well1024aRng.load(all_ones)
    rng.next_u32()

    assert rng.next_u32() == 0x04240001
    assert rng.index == 30


def test_index_stays_in_range():
    rng = Well1024aRng.from_seed(3)
    seen = set()
    for _ in range(100):
        rng.next_u32()
        seen.add(rng.index)
    assert seen == set(range(32))


def test_outputs_are_32_bit():
    rng = Well1024aRng.from_seed(0xDEADBEEF)
    for _ in range(500):
        assert 0 <= rng.next_u32() <= 0xFFFFFFFF


def test_zero_state_is_fixed_point():
    rng = Well1024aRng.load([0] * 32)
    assert [rng.next_u32() for _ in range(100)] == [0] * 100
    assert rng.snapshot() == [0] * 32


def test_same_snapshot_same_stream():
    state = Well1024aRng.from_seed(2024).snapshot()
    a = Well1024aRng.load(state)
    b = Well1024aRng.load(state)
    assert [a.next_u32() for _ in range(200)] == [b.next_u32() for _ in range(200)]


def test_mid_stream_snapshot_replays_remaining_sequence():
    rng = Well1024aRng.from_seed(77)
    for _ in range(45):
        rng.next_u32()

    replay = Well1024aRng.load(rng.snapshot())
    assert [replay.next_u32() for _ in range(100)] == [rng.next_u32() for _ in range(100)]


def test_nearby_seeds_diverge_after_draws():
    a = Well1024aRng.from_seed(10)
    b = Well1024aRng.from_seed(11)
    assert [a.next_u32() for _ in range(64)] != [b.next_u32() for _ in range(64)]


def test_next_u64_from_all_ones(all_ones):
    rng = Well1024aRng.load(all_ones)
    assert rng.next_u64() == 0x0808480104240001


def test_next_u64_high_half_first():
    state = Well1024aRng.from_seed(8).snapshot()
    words = Well1024aRng.load(state)
    wide = Well1024aRng.load(state)

    for _ in range(20):
        hi, lo = words.next_u32(), words.next_u32()
        assert wide.next_u64() == (hi << 32) | lo


def test_next_f32_scales_single_precision_word(all_ones):
    rng = Well1024aRng.load(all_ones)
    value = rng.next_f32()

    assert isinstance(value, np.float32)
    # 0x08084801 rounds to 0x08084800 in single precision
    assert value == np.float32(0x08084800 / 2 ** 32)


def test_next_f32_range():
    rng = Well1024aRng.from_seed(31337)
    for _ in range(1000):
        value = rng.next_f32()
        assert 0.0 <= value <= 1.0


def test_next_f32_top_words_round_to_one():
    rng = Well1024aRng.from_seed(1)
    rng.next_u32 = lambda: 0xFFFFFFFF
    assert rng.next_f32() == np.float32(1.0)

    rng.next_u32 = lambda: 0xFFFFFF7F
    assert rng.next_f32() < np.float32(1.0)


def test_from_entropy_uses_injected_source(fixed_entropy):
    rng = Well1024aRng.from_entropy(fixed_entropy)
    assert fixed_entropy.calls == [32]
    assert rng.snapshot() == list(range(100, 132))


def test_from_entropy_propagates_source_failure(failing_entropy):
    with pytest.raises(OSError):
        Well1024aRng.from_entropy(failing_entropy)


def test_from_entropy_rejects_short_source():
    class ShortEntropy:
        def words(self, count):
            return [1] * (count - 1)

    with pytest.raises(InvalidStateLength) as excinfo:
        Well1024aRng.from_entropy(ShortEntropy())
    assert excinfo.value.actual == 31


def test_os_entropy_words():
    words = OsEntropy().words(32)
    assert len(words) == 32
    assert all(0 <= w <= 0xFFFFFFFF for w in words)
