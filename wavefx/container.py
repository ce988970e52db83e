# wavefx/container.py
# RIFF/WAVE container codec for 16-bit linear PCM, mono or stereo.
#
# Layout (all numeric fields little-endian):
#   0  "RIFF"  4  riff_size  8  "WAVE"
#   12 "fmt "  16 fmt_size   20 audio_format  22 channel_count
#   24 sample_rate  28 byte_rate  32 block_align  34 bits_per_sample
#   36 "data"  40 data_size  44.. interleaved samples

import io
import logging
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from wavefx import codec
from wavefx.errors import (
    MalformedFormatChunk,
    TruncatedStream,
    UnexpectedMagicNumber,
    UnsupportedBitDepth,
    UnsupportedChannelCount,
    UnsupportedFormat,
    WaveError,
)
from wavefx.wave_model import MAX_SAMPLE_RATE, Wave

logger = logging.getLogger(__name__)

PCM_FORMAT: int = 1
BITS_PER_SAMPLE: int = 16
BYTES_PER_SAMPLE: int = BITS_PER_SAMPLE // 8
FMT_CHUNK_SIZE: int = 16
HEADER_SIZE: int = 44
OUTPUT_CHANNELS: int = 2
SUPPORTED_CHANNEL_COUNTS: tuple[int, ...] = (1, 2)

# Little-endian signed 16-bit, the on-disk sample type
PCM16_LE = np.dtype("<i2")


class ByteReader(Protocol):
    def read(self, size: int) -> bytes: ...


class ByteWriter(Protocol):
    def write(self, data: bytes) -> int: ...


@dataclass(frozen=True)
class FormatDescriptor:
    """Fields of the fmt chunk, only alive while decoding or encoding."""
    audio_format: int
    channel_count: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int

    @classmethod
    def canonical(cls, sample_rate: int) -> "FormatDescriptor":
        """The stereo 16-bit PCM descriptor the encoder always writes."""
        block_align: int = OUTPUT_CHANNELS * BYTES_PER_SAMPLE
        return cls(
            audio_format=PCM_FORMAT,
            channel_count=OUTPUT_CHANNELS,
            sample_rate=sample_rate,
            byte_rate=sample_rate * block_align,
            block_align=block_align,
            bits_per_sample=BITS_PER_SAMPLE,
        )

    def validate(self) -> None:
        """Check the arithmetic relations between fields; never corrects them."""
        expected_align: int = self.channel_count * self.bits_per_sample // 8
        if self.block_align != expected_align:
            raise MalformedFormatChunk(
                f"block_align is {self.block_align}, expected {expected_align} "
                f"for {self.channel_count} channel(s) at {self.bits_per_sample} bits."
            )
        if self.sample_rate == 0:
            raise MalformedFormatChunk("sample_rate is 0.")
        expected_rate: int = self.sample_rate * self.block_align
        if self.byte_rate != expected_rate:
            raise MalformedFormatChunk(
                f"byte_rate is {self.byte_rate}, expected {expected_rate} "
                f"({self.sample_rate} Hz x {self.block_align} bytes)."
            )


# ── Decoding ─────────────────────────────────────────────────────

def _read_exact(reader: ByteReader, size: int, field: str) -> bytes:
    # read() may return short counts before EOF; only b"" means the end
    data = bytearray()
    while len(data) < size:
        chunk: bytes = reader.read(size - len(data))
        if not chunk:
            raise TruncatedStream(field, size, len(data))
        data += chunk
    return bytes(data)


def _expect_tag(reader: ByteReader, tag: bytes) -> None:
    raw: bytes = _read_exact(reader, 4, f"'{tag.decode('ascii')}' tag")
    if codec.read_u32(raw, "big") != codec.tag_value(tag):
        raise UnexpectedMagicNumber(tag.decode("ascii"), raw)


def _read_format(reader: ByteReader) -> FormatDescriptor:
    fmt_size: int = codec.read_u32(_read_exact(reader, 4, "fmt chunk size"))
    if fmt_size < FMT_CHUNK_SIZE:
        raise MalformedFormatChunk(
            f"fmt chunk is {fmt_size} bytes, too small for the {FMT_CHUNK_SIZE} "
            f"bytes of standard fields."
        )

    audio_format: int = codec.read_u16(_read_exact(reader, 2, "audio_format"))
    if audio_format != PCM_FORMAT:
        raise UnsupportedFormat(audio_format)

    channel_count: int = codec.read_u16(_read_exact(reader, 2, "channel_count"))
    if channel_count not in SUPPORTED_CHANNEL_COUNTS:
        raise UnsupportedChannelCount(channel_count)

    sample_rate: int = codec.read_u32(_read_exact(reader, 4, "sample_rate"))
    byte_rate: int = codec.read_u32(_read_exact(reader, 4, "byte_rate"))
    block_align: int = codec.read_u16(_read_exact(reader, 2, "block_align"))

    bits_per_sample: int = codec.read_u16(_read_exact(reader, 2, "bits_per_sample"))
    if bits_per_sample != BITS_PER_SAMPLE:
        raise UnsupportedBitDepth(bits_per_sample)

    fmt = FormatDescriptor(
        audio_format=audio_format,
        channel_count=channel_count,
        sample_rate=sample_rate,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=bits_per_sample,
    )
    fmt.validate()
    if sample_rate > MAX_SAMPLE_RATE:
        raise MalformedFormatChunk(
            f"sample_rate {sample_rate} Hz is too high to re-encode as stereo "
            f"(max {MAX_SAMPLE_RATE} Hz)."
        )

    # WAVE_FORMAT extension bytes (cbSize and friends) are not used
    if fmt_size > FMT_CHUNK_SIZE:
        _read_exact(reader, fmt_size - FMT_CHUNK_SIZE, "fmt chunk extension")

    return fmt


def decode_wav(reader: ByteReader) -> Wave:
    """
    Decode a 16-bit PCM WAV file from a sequential byte reader.

    The reader is consumed left to right with exact-size reads and is never
    seeked. Mono input is duplicated into both channels.

    Raises:
        UnexpectedMagicNumber, UnsupportedFormat, UnsupportedChannelCount,
        UnsupportedBitDepth, MalformedFormatChunk, TruncatedStream
    """
    _expect_tag(reader, b"RIFF")
    riff_size: int = codec.read_u32(_read_exact(reader, 4, "riff_size"))
    _expect_tag(reader, b"WAVE")
    _expect_tag(reader, b"fmt ")

    fmt: FormatDescriptor = _read_format(reader)

    _expect_tag(reader, b"data")
    data_size: int = codec.read_u32(_read_exact(reader, 4, "data_size"))

    frame_count: int = data_size // fmt.block_align
    logger.debug(
        "decoding riff_size=%d channels=%d rate=%d data_size=%d frames=%d",
        riff_size, fmt.channel_count, fmt.sample_rate, data_size, frame_count,
    )

    payload: bytes = _read_exact(reader, frame_count * fmt.block_align, "sample data")
    remainder: int = data_size - frame_count * fmt.block_align
    if remainder:
        logger.warning(
            "data chunk ends with a partial frame (%d byte(s)); dropping it", remainder
        )
        _read_exact(reader, remainder, "partial frame")

    pcm: np.ndarray = np.frombuffer(payload, dtype=PCM16_LE)
    if fmt.channel_count == 1:
        return Wave.from_pcm16(pcm, pcm, fmt.sample_rate)

    frames: np.ndarray = pcm.reshape(-1, 2)
    return Wave.from_pcm16(frames[:, 0], frames[:, 1], fmt.sample_rate)


def read_wav(data: bytes) -> Wave:
    """Decode a complete WAV file held in memory."""
    return decode_wav(io.BytesIO(data))


# ── Encoding ─────────────────────────────────────────────────────

def encode_header(fmt: FormatDescriptor, num_frames: int) -> bytes:
    data_size: int = num_frames * fmt.block_align
    if HEADER_SIZE - 8 + data_size > 0xFFFFFFFF:
        raise WaveError(
            f"{num_frames} frames do not fit in a single RIFF file (4 GiB limit).\n"
            f"    → Split the wave into shorter parts before encoding."
        )
    header = bytearray()
    header += codec.write_u32(codec.RIFF, "big")
    header += codec.write_u32(HEADER_SIZE - 8 + data_size)
    header += codec.write_u32(codec.WAVE, "big")
    header += codec.write_u32(codec.FMT, "big")
    header += codec.write_u32(FMT_CHUNK_SIZE)
    header += codec.write_u16(fmt.audio_format)
    header += codec.write_u16(fmt.channel_count)
    header += codec.write_u32(fmt.sample_rate)
    header += codec.write_u32(fmt.byte_rate)
    header += codec.write_u16(fmt.block_align)
    header += codec.write_u16(fmt.bits_per_sample)
    header += codec.write_u32(codec.DATA, "big")
    header += codec.write_u32(data_size)
    return bytes(header)


def encode_wav(wave: Wave) -> bytes:
    """
    Serialize a Wave as a canonical stereo 16-bit PCM WAV file.

    Header fields are recomputed from the wave; samples are rounded to the
    nearest int16 and hard-clipped to the 16-bit range.
    """
    fmt: FormatDescriptor = FormatDescriptor.canonical(wave.sample_rate)
    left, right = wave.to_pcm16()

    # Interleave frame by frame: L0 R0 L1 R1 ...
    frames: np.ndarray = np.empty((wave.num_frames, OUTPUT_CHANNELS), dtype=PCM16_LE)
    frames[:, 0] = left
    frames[:, 1] = right

    encoded: bytes = encode_header(fmt, wave.num_frames) + frames.tobytes()
    logger.debug("encoded %d frames into %d bytes", wave.num_frames, len(encoded))
    return encoded


def write_wav(wave: Wave, writer: ByteWriter) -> int:
    """Encode ``wave`` and hand the bytes to ``writer``. Returns the byte count."""
    encoded: bytes = encode_wav(wave)
    writer.write(encoded)
    return len(encoded)
