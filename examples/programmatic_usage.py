"""Run a benchmark from Python instead of the CLI.

Start any HTTP server on port 80 (or change ``port`` below), then:

    python examples/programmatic_usage.py localhost
"""

from __future__ import annotations

import sys

from httpbench import Coordinator, aggregate, build_config, render_table
from httpbench._internal.logging import setup_logging


def main(host: str) -> None:
    setup_logging()
    config = build_config(host, 20, max_workers=4, timeout=5.0, port=80)
    coordinator = Coordinator(config)
    result = coordinator.run()
    report = aggregate(
        result.tasks,
        coordinator.num_workers,
        config.requests_per_worker,
        result.failed_workers,
    )
    print(render_table(report))
    print(f"{report.succeeded_requests} of {report.total_requests} requests succeeded")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "localhost")
