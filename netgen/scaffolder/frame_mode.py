"""Read-mode resolution.

Converts one of the four ``read_mode`` variants of a service document into the
flat, template-ready :class:`FrameFields`: one boolean flag per mode plus the
fields that belong to the active mode.  Fields of the inactive modes are
always ``None``.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator

from netgen.config import (
    LENGTH_PREFIX_WIDTHS,
    DelimitedMode,
    FixedSizeMode,
    LengthPrefixedMode,
    LinesMode,
)
from netgen.errors import FrameModeError


# Python statements decoding the header bytes in ``len_buf`` into ``frame_len``.
_LENGTH_DECODE_EXPRESSIONS: dict[tuple[int, bool], str] = {
    (2, True): 'frame_len = struct.unpack(">H", len_buf)[0]',
    (2, False): 'frame_len = struct.unpack("<H", len_buf)[0]',
    (4, True): 'frame_len = struct.unpack(">I", len_buf)[0]',
    (4, False): 'frame_len = struct.unpack("<I", len_buf)[0]',
}

# Mode flag -> fields that may only be set while that flag is on.
_MODE_FIELDS: dict[str, tuple[str, ...]] = {
    "is_lines": ("max_line_len",),
    "is_fixed_size": ("frame_size",),
    "is_delimited": ("delim_byte", "delim_max_len"),
    "is_length_prefixed": ("lp_len_bytes", "lp_big_endian", "lp_max_len", "lp_parse_len_code"),
}


class FrameFields(BaseModel):
    """Template fields describing how the generated server frames a stream."""

    model_config = ConfigDict(frozen=True)

    # lines
    max_line_len: Optional[int] = None

    # fixed_size
    frame_size: Optional[int] = None

    # delimited
    delim_byte: Optional[int] = None
    delim_max_len: Optional[int] = None

    # length_prefixed
    lp_len_bytes: Optional[int] = None
    lp_big_endian: Optional[bool] = None
    lp_max_len: Optional[int] = None
    lp_parse_len_code: Optional[str] = None

    is_lines: bool = False
    is_fixed_size: bool = False
    is_delimited: bool = False
    is_length_prefixed: bool = False

    @model_validator(mode="after")
    def _check_single_mode(self) -> "FrameFields":
        active = [flag for flag in _MODE_FIELDS if getattr(self, flag)]
        if len(active) != 1:
            raise ValueError(f"exactly one read mode must be active, got {active or 'none'}")
        for flag, fields in _MODE_FIELDS.items():
            if flag in active:
                continue
            stray = [name for name in fields if getattr(self, name) is not None]
            if stray:
                raise ValueError(f"fields {stray} do not belong to mode {active[0]}")
        return self


def length_decode_expression(len_bytes: int, big_endian: bool) -> str:
    """Return the statement that decodes a length header of *len_bytes* bytes.

    The statement reads the header from ``len_buf`` and binds the unsigned
    frame length to ``frame_len``.  Endianness is ignored for single-byte
    headers.

    Raises:
        FrameModeError: If *len_bytes* is not 1, 2 or 4.
    """
    if len_bytes not in LENGTH_PREFIX_WIDTHS:
        raise FrameModeError(f"len_bytes must be 1, 2 or 4 (got {len_bytes})")
    if len_bytes == 1:
        return "frame_len = len_buf[0]"
    return _LENGTH_DECODE_EXPRESSIONS[(len_bytes, big_endian)]


def resolve_frame_mode(
    mode: LinesMode | FixedSizeMode | DelimitedMode | LengthPrefixedMode,
) -> FrameFields:
    """Resolve a read mode into :class:`FrameFields`.

    Raises:
        FrameModeError: For a length prefix width other than 1, 2 or 4, or
            an unknown mode object.
    """
    if isinstance(mode, LinesMode):
        return FrameFields(is_lines=True, max_line_len=mode.max_line_len)
    if isinstance(mode, FixedSizeMode):
        return FrameFields(is_fixed_size=True, frame_size=mode.frame_size)
    if isinstance(mode, DelimitedMode):
        return FrameFields(
            is_delimited=True,
            delim_byte=mode.delim,
            delim_max_len=mode.max_len,
        )
    if isinstance(mode, LengthPrefixedMode):
        return FrameFields(
            is_length_prefixed=True,
            lp_len_bytes=mode.len_bytes,
            lp_big_endian=mode.big_endian,
            lp_max_len=mode.max_len,
            lp_parse_len_code=length_decode_expression(mode.len_bytes, mode.big_endian),
        )
    raise FrameModeError(f"Unsupported read mode: {type(mode).__name__}")
