import os
from pathlib import Path
from typing import Any

import pytest

# Subprocess coverage for the CLI tests; the collector teardown is patched
# because it asserts on collectors started in other processes.
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop


@pytest.fixture  # type: ignore[misc]
def monkey_file(tmp_path: Path) -> Path:
    path = tmp_path / "program.monkey"
    path.write_text("let x = 5;\nx * 2 + 1;\n", encoding="utf-8")
    return path
