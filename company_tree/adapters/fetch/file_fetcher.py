"""JSON file record fetcher adapter.

Reads '<data_dir>/<resource>.json' so a run can be reproduced
without network access.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from ...config import SourceConfig, get_config
from ...domain.errors import FetchError
from ...ports.records import RawRecord


@dataclass
class JsonFileRecordFetcher:
    """Record fetcher that loads JSON arrays from local files.

    Attributes:
        config: Source configuration (data_dir)
    """

    config: SourceConfig = field(default_factory=lambda: get_config().source)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def close(self) -> None:
        pass

    def path_for(self, resource: str) -> Path:
        """Full path of the file holding a resource."""
        return self.config.data_dir / f"{resource}.json"

    def fetch_records(self, resource: str) -> Sequence[RawRecord]:
        """Load every record of a resource from disk.

        Raises:
            FetchError: If the file is missing, unreadable or malformed.
        """
        path = self.path_for(resource)
        self._logger.debug("Loading records", extra={"path": str(path)})

        try:
            with path.open(encoding="utf-8") as f:
                payload = json.load(f)
        except OSError as e:
            raise FetchError(
                f"Cannot read records file {path}",
                resource=resource,
                cause=e,
            )
        except ValueError as e:
            raise FetchError(
                f"Records file {path} is not valid JSON",
                resource=resource,
                cause=e,
            )

        if not isinstance(payload, list):
            raise FetchError(
                f"Records file {path} does not hold a list",
                resource=resource,
            )

        self._logger.info(
            "Records loaded",
            extra={"resource": resource, "records": len(payload)},
        )
        return payload
