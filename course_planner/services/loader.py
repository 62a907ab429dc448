"""
Reads raw per-subject course files from disk.

Layout:

    <data_dir>/courses/CSCI.json
    <data_dir>/courses/MATH.json
    ...

Each file is one raw unit; its stem is the subject code. Files that cannot
be read or decoded are logged and skipped, so one broken file never keeps
the rest of the catalog from loading.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterator, Tuple

logger = logging.getLogger("course_planner.loader")

RawUnit = Tuple[str, Any]


class JsonDirectoryLoader:
    def __init__(self, data_dir: str | Path):
        self.courses_dir = Path(data_dir) / "courses"

    def __call__(self) -> Iterator[RawUnit]:
        if not self.courses_dir.is_dir():
            logger.warning("course data directory not found: %s", self.courses_dir)
            return

        for path in sorted(self.courses_dir.glob("*.json")):
            try:
                payload = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
                logger.warning("skip course file %s: %s", path.name, e)
                continue
            yield path.stem, payload
