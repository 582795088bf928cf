from __future__ import annotations

import pytest

from shared.logger import CoffLogger

from coffdump.core.engine import CoffEngine

from builders import SectionSpec, SymbolSpec, build_object


@pytest.fixture
def quiet_logger() -> CoffLogger:
    return CoffLogger("test", log_level="DEBUG", console_output=False)


@pytest.fixture
def engine(quiet_logger: CoffLogger) -> CoffEngine:
    return CoffEngine(logger=quiet_logger)


@pytest.fixture
def minimal_object() -> bytes:
    """One .text section with two relocations and one symbol."""
    return build_object(
        [
            SectionSpec(
                name=b".text",
                data=bytes(range(16)),
                relocations=[
                    (0x04, 0, 0x00, 0x0006, 0),
                    (0x0C, 0, 0x08, 0x0007, 0),
                ],
            ),
        ],
        [SymbolSpec(name=b"_main", value=0, scnum=1, stype=0x20, sclass=2)],
    )


@pytest.fixture
def minimal_path(tmp_path, minimal_object: bytes):
    path = tmp_path / "minimal.o"
    path.write_bytes(minimal_object)
    return path
