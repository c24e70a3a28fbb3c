"""Command-line entry point.

Prints the company cost tree as JSON, followed by the elapsed time.
Source, root policy and output options come from CTREE_* environment
variables (see config.py).
"""

from __future__ import annotations

import logging
import sys
import time
from typing import Optional

from .config import AppConfig, get_config
from .container import Container
from .domain.errors import CompanyTreeError
from .services import CompanyTreeService

logger = logging.getLogger("company_tree")


def configure_logging(config: AppConfig) -> None:
    """Send log records to stderr so stdout only carries the tree."""
    logging.basicConfig(
        level=config.observability.level.upper(),
        format=config.observability.format,
        stream=sys.stderr,
    )


def main(config: Optional[AppConfig] = None) -> int:
    config = config or get_config()
    configure_logging(config)

    container = Container.create_default(config)
    service: CompanyTreeService = container.resolve(CompanyTreeService)

    start = time.perf_counter()
    try:
        output = service.render()
    except CompanyTreeError as e:
        logger.error("Company tree run failed", extra={"error": str(e)})
        print(e)
        return 1
    finally:
        service.close()

    print(output)
    print(f"Total time: {time.perf_counter() - start}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
