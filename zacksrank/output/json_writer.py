"""JSON output writer."""

import json
import logging
import sys
from typing import TextIO

from pydantic import BaseModel

logger = logging.getLogger("zacksrank")


class JSONWriter:
    """Writes pydantic models as JSON to a text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        """Initialize JSON writer.

        Args:
            stream: Output stream. If None, writes to stdout.
        """
        self.stream = stream or sys.stdout

    def write(self, data: BaseModel | list[BaseModel] | None) -> None:
        """Serialize one model, a list of models, or null.

        Args:
            data: Data to write. Vendor field aliases are used for quotes.
        """
        if isinstance(data, list):
            payload = [item.model_dump(mode="json", by_alias=True) for item in data]
        elif data is None:
            payload = None
        else:
            payload = data.model_dump(mode="json", by_alias=True)

        json.dump(payload, self.stream, indent=2, ensure_ascii=False, default=str)
        self.stream.write("\n")
        logger.debug(f"Wrote JSON output ({type(data).__name__})")
