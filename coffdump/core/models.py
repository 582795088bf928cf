"""
coffdump Data Models
=====================

Pydantic models for the four COFF record types and the decoded image that
aggregates them.  All models are frozen: a record never changes once the
decoder has produced it.

Field widths are expressed as constrained integer aliases (``U16``, ``U32``,
...) so a model built by hand -- e.g. in tests -- is checked against the
on-disk width of the field it describes.

The symbol name field has two on-disk interpretations.  The choice is made at
decode time and modelled as a discriminated union:

- :class:`LiteralName` -- up to eight bytes of text, NUL-padded.
- :class:`TableOffsetName` -- first four bytes zero, last four bytes a
  big-endian offset into the string table.

References:
    - Pydantic v2 documentation, "Discriminated Unions".
      https://docs.pydantic.dev/latest/concepts/unions/
"""

from __future__ import annotations

from typing import Annotated, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator

from coffdump.core.errors import NameEncodingError


# ---------------------------------------------------------------------------
# Fixed-width integer aliases
# ---------------------------------------------------------------------------

U8 = Annotated[int, Field(ge=0, le=0xFF)]
U16 = Annotated[int, Field(ge=0, le=0xFFFF)]
I16 = Annotated[int, Field(ge=-0x8000, le=0x7FFF)]
U32 = Annotated[int, Field(ge=0, le=0xFFFFFFFF)]

NAME_SIZE: int = 8


def decode_name_text(raw: bytes) -> str:
    """Decode a fixed-width name field as text.

    The name ends at the first NUL byte; an 8-byte name without any NUL
    uses all eight bytes.

    Raises:
        NameEncodingError: If the bytes are not valid UTF-8.
    """
    text, _, _ = raw.partition(b"\x00")
    try:
        return text.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise NameEncodingError(raw) from exc


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------

class LiteralName(_Record):
    """An inline name stored directly in the 8-byte name field."""

    kind: Literal["literal"] = "literal"
    raw: bytes = Field(min_length=NAME_SIZE, max_length=NAME_SIZE)

    @field_serializer("raw")
    def _raw_hex(self, raw: bytes) -> str:
        return raw.hex()

    @property
    def text(self) -> str:
        """The decoded name.

        Raises:
            NameEncodingError: If the name bytes are not valid text.
        """
        return decode_name_text(self.raw)


class TableOffsetName(_Record):
    """A long name stored in the string table at :attr:`offset`."""

    kind: Literal["offset"] = "offset"
    raw: bytes = Field(min_length=NAME_SIZE, max_length=NAME_SIZE)
    offset: U32

    @field_serializer("raw")
    def _raw_hex(self, raw: bytes) -> str:
        return raw.hex()


SymbolName = Annotated[Union[LiteralName, TableOffsetName], Field(discriminator="kind")]


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

class FileHeader(_Record):
    """COFF file header (20 bytes).

    Attributes:
        magic: Target machine magic number.
        num_sections: Number of section headers following this header.
        timestamp: Creation time (seconds since the Unix epoch).
        symbol_table_offset: Absolute file offset of the symbol table.
        num_symbols: Number of symbol table entries (auxiliary entries included).
        optional_header_size: Size of the optional header in bytes.
        flags: ``F_*`` flag bits.
    """
    magic: U16
    num_sections: U16
    timestamp: U32
    symbol_table_offset: U32
    num_symbols: U32
    optional_header_size: U16
    flags: U16


class SectionHeader(_Record):
    """COFF section header (40 bytes).

    Attributes:
        name: NUL-padded 8-byte section name.
        physical_addr: Physical address.
        virtual_addr: Virtual address.
        size: Section size in bytes.
        data_offset: File offset of the raw section data.
        relocation_offset: File offset of this section's relocation table.
        line_number_offset: File offset of the line number table.
        num_relocations: Number of relocation entries.
        num_line_numbers: Number of line number entries.
        flags: ``STYP_*`` flag bits.
    """
    name: LiteralName
    physical_addr: U32
    virtual_addr: U32
    size: U32
    data_offset: U32
    relocation_offset: U32
    line_number_offset: U32
    num_relocations: U16
    num_line_numbers: U16
    flags: U32


class Relocation(_Record):
    """COFF relocation entry (16 bytes)."""
    virtual_addr: U32
    symbol_index: U32
    offset: U32
    type: U16
    extra: U16


class Symbol(_Record):
    """COFF symbol table entry (18 bytes).

    Attributes:
        name: Inline name or string-table reference.
        value: Symbol value (usually an address).
        section_number: 1-based section number, or ``N_UNDEF``/``N_ABS``/``N_DEBUG``.
        type: Symbol type word.
        storage_class: ``C_*`` storage class.
        num_aux_entries: Number of auxiliary entries following this one.
    """
    name: SymbolName
    value: U32
    section_number: I16
    type: U16
    storage_class: U8
    num_aux_entries: U8

    @property
    def has_long_name(self) -> bool:
        """``True`` when the name lives in the string table."""
        return isinstance(self.name, TableOffsetName)


# ---------------------------------------------------------------------------
# Decoded image
# ---------------------------------------------------------------------------

class CoffImage(_Record):
    """Everything decoded from one object file.

    ``relocations[i]`` holds the relocation table of ``sections[i]``; output
    numbers sections from 1, so use :meth:`relocations_for` with the
    1-based section number.
    """
    source: str = ""
    size: int = 0
    header: FileHeader
    sections: tuple[SectionHeader, ...] = ()
    relocations: tuple[tuple[Relocation, ...], ...] = ()
    symbols: tuple[Symbol, ...] = ()

    @model_validator(mode="after")
    def _relocations_align_with_sections(self) -> CoffImage:
        if len(self.relocations) != len(self.sections):
            raise ValueError(
                f"{len(self.relocations)} relocation tables for "
                f"{len(self.sections)} sections"
            )
        return self

    def relocations_for(self, section_number: int) -> tuple[Relocation, ...]:
        """Return the relocation table of the 1-based *section_number*."""
        if not 1 <= section_number <= len(self.sections):
            raise IndexError(f"No section {section_number}")
        return self.relocations[section_number - 1]

    def iter_sections(self) -> Iterator[tuple[int, SectionHeader]]:
        """Yield ``(section_number, section)`` pairs, numbered from 1."""
        yield from enumerate(self.sections, start=1)

    def iter_relocations(self) -> Iterator[tuple[int, Relocation]]:
        """Yield ``(section_number, relocation)`` pairs in section order."""
        for number, table in enumerate(self.relocations, start=1):
            for reloc in table:
                yield number, reloc

    @property
    def relocation_count(self) -> int:
        return sum(len(table) for table in self.relocations)
