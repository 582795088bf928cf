"""Synthetic big-endian COFF object file builders for the test suite."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

FILE_HEADER = struct.Struct(">HHIIIHH")
SECTION_HEADER = struct.Struct(">8sIIIIIIHHI")
RELOCATION = struct.Struct(">IIIHH")
SYMBOL = struct.Struct(">8sIhHBB")


def name8(name: bytes) -> bytes:
    assert len(name) <= 8
    return name.ljust(8, b"\x00")


def long_name(offset: int) -> bytes:
    return struct.pack(">II", 0, offset)


def pack_file_header(
    magic: int = 0x0150,
    nscns: int = 0,
    timdat: int = 0,
    symptr: int = 0,
    nsyms: int = 0,
    opthdr: int = 0,
    flags: int = 0,
) -> bytes:
    return FILE_HEADER.pack(magic, nscns, timdat, symptr, nsyms, opthdr, flags)


def pack_section(
    name: bytes = b".text",
    paddr: int = 0,
    vaddr: int = 0,
    size: int = 0,
    scnptr: int = 0,
    relptr: int = 0,
    lnnoptr: int = 0,
    nreloc: int = 0,
    nlnno: int = 0,
    flags: int = 0,
) -> bytes:
    return SECTION_HEADER.pack(
        name8(name), paddr, vaddr, size, scnptr, relptr, lnnoptr,
        nreloc, nlnno, flags,
    )


def pack_relocation(
    vaddr: int, symndx: int, offset: int = 0, rtype: int = 0, extra: int = 0,
) -> bytes:
    return RELOCATION.pack(vaddr, symndx, offset, rtype, extra)


def pack_symbol(
    name: bytes,
    value: int = 0,
    scnum: int = 1,
    stype: int = 0,
    sclass: int = 2,
    numaux: int = 0,
) -> bytes:
    return SYMBOL.pack(name8(name), value, scnum, stype, sclass, numaux)


@dataclass
class SectionSpec:
    name: bytes = b".text"
    data: bytes = b""
    relocations: list[tuple[int, int, int, int, int]] = field(default_factory=list)
    flags: int = 0x20
    vaddr: int = 0


@dataclass
class SymbolSpec:
    name: bytes
    value: int = 0
    scnum: int = 1
    stype: int = 0
    sclass: int = 2
    numaux: int = 0


def build_object(
    sections: list[SectionSpec],
    symbols: list[SymbolSpec],
    *,
    reloc_order: list[int] | None = None,
    symbols_first: bool = False,
    magic: int = 0x0150,
    timdat: int = 0x5F5E1000,
    flags: int = 0,
) -> bytes:
    """Assemble a complete object file.

    Layout: header, section headers, section data, then the relocation
    tables in *reloc_order* (section indices, 0-based) and the symbol table.
    With *symbols_first* the symbol table precedes the relocation tables.
    """
    nscns = len(sections)
    cursor = FILE_HEADER.size + nscns * SECTION_HEADER.size

    data_offsets: list[int] = []
    for sec in sections:
        data_offsets.append(cursor if sec.data else 0)
        cursor += len(sec.data)

    order = reloc_order if reloc_order is not None else list(range(nscns))
    symtab = b"".join(
        pack_symbol(s.name, s.value, s.scnum, s.stype, s.sclass, s.numaux)
        for s in symbols
    )

    symptr = 0
    if symbols_first:
        symptr = cursor
        cursor += len(symtab)

    reloc_offsets = [0] * nscns
    reloc_blob = b""
    for idx in order:
        table = b"".join(pack_relocation(*r) for r in sections[idx].relocations)
        if table:
            reloc_offsets[idx] = cursor
        reloc_blob += table
        cursor += len(table)

    if not symbols_first:
        symptr = cursor

    out = pack_file_header(magic, nscns, timdat, symptr, len(symbols), 0, flags)
    for i, sec in enumerate(sections):
        out += pack_section(
            sec.name,
            paddr=sec.vaddr,
            vaddr=sec.vaddr,
            size=len(sec.data),
            scnptr=data_offsets[i],
            relptr=reloc_offsets[i],
            nreloc=len(sec.relocations),
            flags=sec.flags,
        )
    for sec in sections:
        out += sec.data
    if symbols_first:
        out += symtab + reloc_blob
    else:
        out += reloc_blob + symtab
    # Empty string table: just its 4-byte size field.
    out += struct.pack(">I", 4)
    return out
