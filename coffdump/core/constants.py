"""
COFF Constants
===============

Symbolic names for the enum-like and flag fields of System V style COFF
object files.  Decoders never consult these tables -- unknown values are
decoded verbatim -- they exist only so the presentation layer can annotate
raw values.

References:
    - AT&T. (1989). UNIX System V Release 4 Programmer's Guide: ANSI C and
      Programming Support Tools, chapter "Common Object File Format".
    - GNU binutils ``include/coff/internal.h``.
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# File header magic numbers
# ---------------------------------------------------------------------------

I386MAGIC: int = 0x014C
MC68MAGIC: int = 0x0150
MC68KPGMAGIC: int = 0x0153
MIPSEBMAGIC: int = 0x0160
MIPSELMAGIC: int = 0x0162
U802TOCMAGIC: int = 0x01DF
AMD64MAGIC: int = 0x8664

_MAGIC_NAMES: dict[int, str] = {
    I386MAGIC: "I386MAGIC",
    MC68MAGIC: "MC68MAGIC",
    MC68KPGMAGIC: "MC68KPGMAGIC",
    MIPSEBMAGIC: "MIPSEBMAGIC",
    MIPSELMAGIC: "MIPSELMAGIC",
    U802TOCMAGIC: "U802TOCMAGIC",
    AMD64MAGIC: "AMD64MAGIC",
}

# ---------------------------------------------------------------------------
# File header flags (f_flags)
# ---------------------------------------------------------------------------

F_RELFLG: int = 0x0001  # Relocation info stripped
F_EXEC: int = 0x0002    # File is executable
F_LNNO: int = 0x0004    # Line numbers stripped
F_LSYMS: int = 0x0008   # Local symbols stripped
F_AR32WR: int = 0x0100  # 32-bit little-endian host
F_AR32W: int = 0x0200   # 32-bit big-endian host

_FILE_FLAG_NAMES: dict[int, str] = {
    F_RELFLG: "RELFLG",
    F_EXEC: "EXEC",
    F_LNNO: "LNNO",
    F_LSYMS: "LSYMS",
    F_AR32WR: "AR32WR",
    F_AR32W: "AR32W",
}

# ---------------------------------------------------------------------------
# Section header flags (s_flags)
# ---------------------------------------------------------------------------

STYP_DSECT: int = 0x0001
STYP_NOLOAD: int = 0x0002
STYP_GROUP: int = 0x0004
STYP_PAD: int = 0x0008
STYP_COPY: int = 0x0010
STYP_TEXT: int = 0x0020
STYP_DATA: int = 0x0040
STYP_BSS: int = 0x0080
STYP_INFO: int = 0x0200
STYP_OVER: int = 0x0400
STYP_LIB: int = 0x0800

_SECTION_FLAG_NAMES: dict[int, str] = {
    STYP_DSECT: "DSECT",
    STYP_NOLOAD: "NOLOAD",
    STYP_GROUP: "GROUP",
    STYP_PAD: "PAD",
    STYP_COPY: "COPY",
    STYP_TEXT: "TEXT",
    STYP_DATA: "DATA",
    STYP_BSS: "BSS",
    STYP_INFO: "INFO",
    STYP_OVER: "OVER",
    STYP_LIB: "LIB",
}

# ---------------------------------------------------------------------------
# Special symbol section numbers (n_scnum)
# ---------------------------------------------------------------------------

N_DEBUG: int = -2
N_ABS: int = -1
N_UNDEF: int = 0

_SECTION_NUMBER_NAMES: dict[int, str] = {
    N_DEBUG: "N_DEBUG",
    N_ABS: "N_ABS",
    N_UNDEF: "N_UNDEF",
}

# ---------------------------------------------------------------------------
# Symbol storage classes (n_sclass)
# ---------------------------------------------------------------------------

C_EFCN: int = 0xFF
C_NULL: int = 0
C_AUTO: int = 1
C_EXT: int = 2
C_STAT: int = 3
C_REG: int = 4
C_EXTDEF: int = 5
C_LABEL: int = 6
C_ULABEL: int = 7
C_MOS: int = 8
C_ARG: int = 9
C_STRTAG: int = 10
C_MOU: int = 11
C_UNTAG: int = 12
C_TPDEF: int = 13
C_USTATIC: int = 14
C_ENTAG: int = 15
C_MOE: int = 16
C_REGPARM: int = 17
C_FIELD: int = 18
C_BLOCK: int = 100
C_FCN: int = 101
C_EOS: int = 102
C_FILE: int = 103
C_LINE: int = 104
C_ALIAS: int = 105
C_HIDDEN: int = 106

_STORAGE_CLASS_NAMES: dict[int, str] = {
    C_EFCN: "EFCN",
    C_NULL: "NULL",
    C_AUTO: "AUTO",
    C_EXT: "EXT",
    C_STAT: "STAT",
    C_REG: "REG",
    C_EXTDEF: "EXTDEF",
    C_LABEL: "LABEL",
    C_ULABEL: "ULABEL",
    C_MOS: "MOS",
    C_ARG: "ARG",
    C_STRTAG: "STRTAG",
    C_MOU: "MOU",
    C_UNTAG: "UNTAG",
    C_TPDEF: "TPDEF",
    C_USTATIC: "USTATIC",
    C_ENTAG: "ENTAG",
    C_MOE: "MOE",
    C_REGPARM: "REGPARM",
    C_FIELD: "FIELD",
    C_BLOCK: "BLOCK",
    C_FCN: "FCN",
    C_EOS: "EOS",
    C_FILE: "FILE",
    C_LINE: "LINE",
    C_ALIAS: "ALIAS",
    C_HIDDEN: "HIDDEN",
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------

def magic_name(magic: int) -> str | None:
    """Return the symbolic name of a file header magic, if known."""
    return _MAGIC_NAMES.get(magic)


def storage_class_name(sclass: int) -> str | None:
    """Return the symbolic name of a storage class, if known."""
    return _STORAGE_CLASS_NAMES.get(sclass)


def section_number_name(scnum: int) -> str | None:
    """Return ``N_UNDEF``/``N_ABS``/``N_DEBUG`` for special section numbers."""
    return _SECTION_NUMBER_NAMES.get(scnum)


def _flag_names(flags: int, table: dict[int, str]) -> list[str]:
    names: list[str] = []
    for bit, name in table.items():
        if flags & bit:
            names.append(name)
    return names


def file_flag_names(flags: int) -> list[str]:
    """Decompose file header flags into their symbolic names."""
    return _flag_names(flags, _FILE_FLAG_NAMES)


def section_flag_names(flags: int) -> list[str]:
    """Decompose section header flags into their symbolic names."""
    return _flag_names(flags, _SECTION_FLAG_NAMES)
