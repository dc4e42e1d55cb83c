"""JSON documents on disk, with failures reported as Result values.

Task and schedule exports are read through here, as is the preferences
file the notification sink rewrites after every delivery.
"""

import json
import os
from pathlib import Path
from typing import Any

from taskflow.domain.shared.result import Err, Ok, Result


class JsonStorage:
    """Reads and writes whole JSON documents.

    Knows nothing about what the documents mean; a missing or corrupt
    file is reported as Err and the caller decides how to recover.

    Example:
        records = JsonStorage().load_records(Path("tasks.json"))
        if isinstance(records, Ok):
            tasks = ingest_tasks(records.value)
    """

    def load_json(self, path: Path) -> Result[Any, str]:
        """Parse the document at path.

        Returns:
            Ok(value), or Err(str) if the file is missing, unreadable or
            not valid JSON.
        """
        if not path.is_file():
            return Err(f"File not found: {path}")
        try:
            with path.open(encoding="utf-8") as fh:
                return Ok(json.load(fh))
        except json.JSONDecodeError as e:
            return Err(f"Invalid JSON in {path}: {e}")
        except OSError as e:
            return Err(f"Cannot read {path}: {e.strerror or e}")

    def save_json(self, path: Path, data: Any, indent: int = 2) -> Result[None, str]:
        """Replace the document at path with data.

        The document is written to a sibling temp file first and moved
        into place, so readers never see a half-written file.

        Returns:
            Ok(None), or Err(str) if data cannot be serialised or the
            file cannot be written.
        """
        try:
            text = json.dumps(data, indent=indent)
        except (TypeError, ValueError) as e:
            return Err(f"Cannot serialise data for {path}: {e}")

        tmp = path.with_name(f".{path.name}.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(text, encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            return Err(f"Cannot write {path}: {e.strerror or e}")
        return Ok(None)

    def load_records(self, path: Path) -> Result[list[dict[str, Any]], str]:
        """Load a JSON array of objects, such as a task or schedule export.

        Non-object entries are dropped.

        Returns:
            Ok(list) if the file holds an array, Err(str) otherwise.
        """
        result = self.load_json(path)
        if isinstance(result, Err):
            return result
        if not isinstance(result.value, list):
            return Err(f"Expected a JSON array in {path}")
        return Ok([record for record in result.value if isinstance(record, dict)])
