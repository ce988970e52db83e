import numpy as np
import pytest

from wavefx.errors import LengthMismatch, OutOfRange, SampleRateMismatch
from wavefx.wave_model import MAX_SAMPLE_RATE, Wave, apply, concatenate, mix, mix_with_offset

# Test Constants
SAMPLE_RATE: int = 44100


# Helpers


def make_wave(left, right=None, sample_rate: int = SAMPLE_RATE) -> Wave:
    """Build a Wave from plain lists; right defaults to a copy of left."""
    return Wave(left, left if right is None else right, sample_rate)


class TestWave:
    """Tests for construction, immutability and equality."""

    def test_unequal_channels_rejected(self) -> None:
        with pytest.raises(LengthMismatch):
            Wave([0.1, 0.2], [0.1], SAMPLE_RATE)

    def test_zero_sample_rate_rejected(self) -> None:
        with pytest.raises(ValueError):
            Wave([0.0], [0.0], 0)

    def test_sample_rate_above_u32_rejected(self) -> None:
        with pytest.raises(ValueError):
            Wave([0.0], [0.0], 2**32)

    def test_sample_rate_must_fit_stereo_byte_rate(self) -> None:
        assert Wave([0.0], [0.0], MAX_SAMPLE_RATE).sample_rate == MAX_SAMPLE_RATE
        with pytest.raises(ValueError, match="Sample rate"):
            Wave([0.0], [0.0], MAX_SAMPLE_RATE + 1)

    def test_fractional_sample_rate_rejected(self) -> None:
        with pytest.raises(ValueError, match="whole number"):
            Wave([0.0], [0.0], 44100.5)

    def test_integral_float_sample_rate_accepted(self) -> None:
        assert Wave([0.0], [0.0], 44100.0).sample_rate == 44100

    def test_two_dimensional_channel_rejected(self) -> None:
        with pytest.raises(ValueError, match="1-D"):
            Wave(np.zeros((2, 2)), np.zeros((2, 2)), SAMPLE_RATE)

    def test_channels_are_read_only(self) -> None:
        wave: Wave = make_wave([0.1, 0.2])
        with pytest.raises(ValueError):
            wave.left[0] = 1.0

    def test_does_not_alias_caller_buffer(self) -> None:
        source: np.ndarray = np.array([0.1, 0.2])
        wave: Wave = Wave(source, source, SAMPLE_RATE)
        source[0] = 0.9
        assert wave.left[0] == 0.1

    def test_equality_compares_samples_and_rate(self) -> None:
        assert make_wave([0.5, -0.5]) == make_wave([0.5, -0.5])
        assert make_wave([0.5, -0.5]) != make_wave([0.5, 0.5])
        assert make_wave([0.5], sample_rate=8000) != make_wave([0.5], sample_rate=16000)

    def test_length_and_duration(self) -> None:
        wave: Wave = make_wave(np.zeros(22050))
        assert len(wave) == wave.num_frames == 22050
        assert wave.duration_seconds == pytest.approx(0.5)

    def test_pcm16_conversion_is_exact(self) -> None:
        pcm: np.ndarray = np.array([-32768, -1, 0, 1, 32767])
        wave: Wave = Wave.from_pcm16(pcm, pcm[::-1], SAMPLE_RATE)
        left, right = wave.to_pcm16()
        np.testing.assert_array_equal(left, pcm)
        np.testing.assert_array_equal(right, pcm[::-1])
        assert left.dtype == np.int16

    def test_repr_mentions_frames_and_rate(self) -> None:
        text: str = repr(make_wave([0.0, 0.0, 0.0], sample_rate=8000))
        assert "frames=3" in text
        assert "sample_rate=8000" in text


class TestConcatenate:
    """Tests for horizontal joining."""

    def test_result_is_a_then_b(self) -> None:
        a: Wave = make_wave([0.1, 0.2], [0.3, 0.4])
        b: Wave = make_wave([0.5], [0.6])
        result: Wave = concatenate(a, b)
        assert len(result) == len(a) + len(b)
        np.testing.assert_array_equal(result.left, [0.1, 0.2, 0.5])
        np.testing.assert_array_equal(result.right, [0.3, 0.4, 0.6])

    def test_operands_may_differ_in_length(self) -> None:
        result: Wave = concatenate(make_wave([0.1]), make_wave([0.2, 0.3, 0.4]))
        assert len(result) == 4
        assert len(result.left) == len(result.right)

    def test_sample_rate_mismatch(self) -> None:
        with pytest.raises(SampleRateMismatch):
            concatenate(make_wave([0.1], sample_rate=8000), make_wave([0.1]))

    def test_operands_untouched(self) -> None:
        a: Wave = make_wave([0.1])
        concatenate(a, make_wave([0.2]))
        assert a == make_wave([0.1])


class TestMix:
    """Tests for elementwise summing."""

    def test_elementwise_sum(self) -> None:
        a: Wave = make_wave([100.0, -100.0])
        b: Wave = make_wave([50.0, 50.0])
        result: Wave = mix(a, b)
        np.testing.assert_array_equal(result.left, [150.0, -50.0])
        np.testing.assert_array_equal(result.right, [150.0, -50.0])

    def test_channels_mixed_independently(self) -> None:
        result: Wave = mix(make_wave([0.1], [0.2]), make_wave([0.3], [0.4]))
        assert result.left[0] == pytest.approx(0.4)
        assert result.right[0] == pytest.approx(0.6)

    def test_length_mismatch(self) -> None:
        with pytest.raises(LengthMismatch):
            mix(make_wave([0.1, 0.2]), make_wave([0.1]))

    def test_sample_rate_mismatch(self) -> None:
        with pytest.raises(SampleRateMismatch):
            mix(make_wave([0.1], sample_rate=8000), make_wave([0.1], sample_rate=16000))


class TestMixWithOffset:
    """Tests for overlaying a wave at an offset."""

    def test_overlap_inside_a(self) -> None:
        a: Wave = make_wave([1.0, 1.0, 1.0, 1.0])
        b: Wave = make_wave([0.5, 0.5])
        result: Wave = mix_with_offset(a, b, 1)
        np.testing.assert_array_equal(result.left, [1.0, 1.5, 1.5, 1.0])

    def test_b_extends_past_a(self) -> None:
        a: Wave = make_wave([1.0, 1.0])
        b: Wave = make_wave([0.5, 0.5, 0.5])
        result: Wave = mix_with_offset(a, b, 1)
        assert len(result) == 4
        np.testing.assert_array_equal(result.left, [1.0, 1.5, 0.5, 0.5])

    def test_gap_between_a_and_b_is_silence(self) -> None:
        a: Wave = make_wave([1.0])
        b: Wave = make_wave([0.5])
        result: Wave = mix_with_offset(a, b, 3)
        np.testing.assert_array_equal(result.right, [1.0, 0.0, 0.0, 0.5])

    def test_zero_offset_equals_mix_for_equal_lengths(self) -> None:
        a: Wave = make_wave([0.1, 0.2], [0.3, 0.4])
        b: Wave = make_wave([0.5, 0.6], [0.7, 0.8])
        assert mix_with_offset(a, b, 0) == mix(a, b)

    def test_result_length_formula(self) -> None:
        a: Wave = make_wave(np.zeros(10))
        b: Wave = make_wave(np.zeros(4))
        for offset in (0, 3, 6, 7, 20):
            assert len(mix_with_offset(a, b, offset)) == max(10, offset + 4)

    def test_negative_offset(self) -> None:
        with pytest.raises(OutOfRange):
            mix_with_offset(make_wave([0.1]), make_wave([0.1]), -1)

    def test_sample_rate_mismatch(self) -> None:
        with pytest.raises(SampleRateMismatch):
            mix_with_offset(make_wave([0.1], sample_rate=8000), make_wave([0.1]), 0)


class TestApply:
    """Tests for per-channel transforms."""

    def test_transform_runs_on_each_channel(self) -> None:
        wave: Wave = make_wave([0.1, 0.2], [0.3, 0.4], sample_rate=8000)
        result: Wave = apply(wave, lambda samples: samples * 2.0)
        np.testing.assert_allclose(result.left, [0.2, 0.4])
        np.testing.assert_allclose(result.right, [0.6, 0.8])
        assert result.sample_rate == 8000

    def test_transform_may_change_length(self) -> None:
        result: Wave = apply(make_wave([0.1, 0.2, 0.3]), lambda samples: samples[:1])
        assert len(result) == 1

    def test_uneven_output_lengths_fail(self) -> None:
        wave: Wave = make_wave([0.1, 0.2], [0.3, 0.4])
        with pytest.raises(LengthMismatch):
            apply(wave, lambda samples: samples[samples > 0.15])

    def test_original_untouched(self) -> None:
        wave: Wave = make_wave([0.1, 0.2])
        apply(wave, lambda samples: samples + 1.0)
        assert wave == make_wave([0.1, 0.2])
