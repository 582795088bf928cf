"""
coffdump Report Generator
==========================

JSON serialisation of a decoded COFF image for machine consumption.

Every decoded field is emitted.  Raw 8-byte name fields are hex strings;
symbol names carry their ``kind`` (``literal`` or ``offset``) so consumers
can tell inline names from string-table references.  Literal names also get
a ``text`` member, ``null`` when the bytes are not valid text.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from coffdump import __version__
from coffdump.core.errors import NameEncodingError
from coffdump.core.models import CoffImage, LiteralName


def _literal_text(name: LiteralName) -> str | None:
    try:
        return name.text
    except NameEncodingError:
        return None


class CoffReportGenerator:
    """Builds JSON reports from :class:`CoffImage` instances.

    Usage::

        gen = CoffReportGenerator()
        print(gen.to_json(image))
        gen.generate_json(image, "report.json")
    """

    def to_dict(self, image: CoffImage) -> dict[str, Any]:
        data = image.model_dump(mode="json")

        for section, dumped in zip(image.sections, data["sections"]):
            dumped["name"]["text"] = _literal_text(section.name)
        for symbol, dumped in zip(image.symbols, data["symbols"]):
            if isinstance(symbol.name, LiteralName):
                dumped["name"]["text"] = _literal_text(symbol.name)

        return {
            "generator": f"coffdump {__version__}",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "image": data,
        }

    def to_json(self, image: CoffImage, indent: int = 2) -> str:
        return json.dumps(self.to_dict(image), indent=indent)

    def generate_json(self, image: CoffImage, output_path: str | Path) -> Path:
        """Write the JSON report to *output_path*.

        Returns:
            The resolved output path.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(image), encoding="utf-8")
        return path.resolve()
