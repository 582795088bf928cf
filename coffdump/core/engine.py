"""
coffdump Layout Walker
=======================

Orchestrates the decode order of a COFF object file.  The walk is a strict
four-phase sequence; each phase depends on counts or offsets produced by an
earlier one, so phases never overlap:

    1. header       -- FileHeader at offset 0
    2. sections     -- ``num_sections`` SectionHeaders, contiguous after the header
    3. relocations  -- per section, ``num_relocations`` entries at ``relocation_offset``
    4. symbols      -- ``num_symbols`` entries at ``symbol_table_offset``

Any failure aborts the whole walk; there is no partial result.  The failing
phase (and section, for relocation tables) is recorded on the raised
:class:`~coffdump.core.errors.CoffError`.
"""

from __future__ import annotations

import enum
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from shared.logger import CoffLogger

from coffdump.core.cursor import ByteCursor
from coffdump.core.errors import CoffError, ReadError
from coffdump.core.models import CoffImage, FileHeader, Relocation, SectionHeader, Symbol
from coffdump.parsers.records import (
    decode_file_header,
    decode_relocation,
    decode_section_header,
    decode_symbol,
)


class Phase(str, enum.Enum):
    """Walker phases, in execution order."""
    HEADER = "header"
    SECTIONS = "sections"
    RELOCATIONS = "relocations"
    SYMBOLS = "symbols"


# ---------------------------------------------------------------------------
# CoffEngine
# ---------------------------------------------------------------------------

class CoffEngine:
    """Walks a COFF object file and returns the decoded :class:`CoffImage`.

    Usage::

        engine = CoffEngine()
        image = engine.inspect("hello.o")
        for number, section in image.iter_sections():
            print(number, section.name.text)
    """

    def __init__(self, logger: CoffLogger | None = None) -> None:
        self._logger: CoffLogger = logger or CoffLogger("engine")

    # ------------------------------------------------------------------ #
    #  Entry points
    # ------------------------------------------------------------------ #

    def inspect(self, file_path: str | Path) -> CoffImage:
        """Open *file_path* read-only and decode it.

        Raises:
            ReadError: If the file cannot be opened.
            CoffError: Any decode or seek failure, annotated with its phase.
        """
        path = Path(file_path)
        self._logger.debug("Inspecting %s", path)
        try:
            fh = open(path, "rb")
        except OSError as exc:
            raise ReadError(f"Cannot open {path}: {exc.strerror or exc}") from exc
        with fh:
            return self.walk(ByteCursor(fh), source=str(path))

    def inspect_bytes(self, data: bytes, source: str = "<memory>") -> CoffImage:
        """Decode an in-memory object file."""
        return self.walk(ByteCursor(data), source=source)

    def walk(self, cursor: ByteCursor, source: str = "") -> CoffImage:
        """Run the four decode phases against *cursor*."""
        with self._logger.timed(f"walk {source or cursor!r}"):
            header = self._read_header(cursor)
            sections = self._read_sections(cursor, header)
            relocations = self._read_relocations(cursor, sections)
            symbols = self._read_symbols(cursor, header)

        image = CoffImage(
            source=source,
            size=cursor.size,
            header=header,
            sections=sections,
            relocations=relocations,
            symbols=symbols,
        )
        self._logger.debug(
            "Decoded %d sections, %d relocations, %d symbols",
            len(image.sections),
            image.relocation_count,
            len(image.symbols),
        )
        return image

    # ------------------------------------------------------------------ #
    #  Phases
    # ------------------------------------------------------------------ #

    @contextmanager
    def _phase(self, phase: Phase, section: int | None = None) -> Iterator[None]:
        """Scope log records to *phase* and annotate escaping errors."""
        with self._logger.operation(phase.value):
            try:
                yield
            except CoffError as exc:
                if exc.phase is None:
                    exc.phase = phase.value
                if exc.section is None:
                    exc.section = section
                raise

    def _read_header(self, cursor: ByteCursor) -> FileHeader:
        with self._phase(Phase.HEADER):
            cursor.seek_absolute(0)
            header = decode_file_header(cursor)
            self._logger.debug(
                "magic=0x%04x nscns=%d symptr=0x%x nsyms=%d",
                header.magic,
                header.num_sections,
                header.symbol_table_offset,
                header.num_symbols,
            )
            return header

    def _read_sections(
        self, cursor: ByteCursor, header: FileHeader,
    ) -> tuple[SectionHeader, ...]:
        with self._phase(Phase.SECTIONS):
            sections = tuple(
                decode_section_header(cursor) for _ in range(header.num_sections)
            )
            self._logger.debug(
                "Decoded %d section headers", len(sections), count=len(sections),
            )
            return sections

    def _read_relocations(
        self, cursor: ByteCursor, sections: tuple[SectionHeader, ...],
    ) -> tuple[tuple[Relocation, ...], ...]:
        tables: list[tuple[Relocation, ...]] = []
        for number, section in enumerate(sections, start=1):
            with self._phase(Phase.RELOCATIONS, section=number):
                if section.num_relocations == 0:
                    tables.append(())
                    continue
                cursor.seek_absolute(section.relocation_offset)
                table = tuple(
                    decode_relocation(cursor)
                    for _ in range(section.num_relocations)
                )
                self._logger.debug(
                    "Section %d: %d relocations at 0x%x",
                    number,
                    len(table),
                    section.relocation_offset,
                )
                tables.append(table)
        return tuple(tables)

    def _read_symbols(
        self, cursor: ByteCursor, header: FileHeader,
    ) -> tuple[Symbol, ...]:
        with self._phase(Phase.SYMBOLS):
            if header.num_symbols == 0:
                return ()
            cursor.seek_absolute(header.symbol_table_offset)
            symbols = tuple(
                decode_symbol(cursor) for _ in range(header.num_symbols)
            )
            self._logger.debug(
                "Decoded %d symbols", len(symbols), count=len(symbols),
            )
            return symbols
