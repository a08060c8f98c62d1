"""Logging handlers for module-based dispatch.

ModuleDispatchHandler routes project log records to per-module files using
the MODULE_TO_LOG mapping. ThirdPartyHandler collects library records
(httpx, uvicorn, fastapi...) into a single file. Both rotate at run
boundaries and only accept records from their side of the split.

File writes are synchronous, like the rest of the logging module.
"""

import logging
from pathlib import Path
from typing import TextIO

from core.logging.run_manager import is_first_party, module_to_log_name, should_rotate


def _rotate_log_file(log_dir: Path, log_name: str, stream: TextIO | None) -> TextIO:
    """Move ``<name>.log`` to ``<name>.previous.log`` and reopen ``<name>.log``.

    Closes ``stream`` first when given.
    """
    current = log_dir / f"{log_name}.log"
    previous = log_dir / f"{log_name}.previous.log"

    if stream:
        stream.close()

    if previous.exists():
        previous.unlink()
    if current.exists():
        current.rename(previous)

    return current.open("a", encoding="utf-8")


class ModuleDispatchHandler(logging.Handler):
    """Single handler that routes project records to per-module log files.

    Keeps one open file per log name instead of one FileHandler per module.
    Files are opened lazily on first write and rotated on the first write of
    each run (at most current + previous per module).

    Usage:
        handler = ModuleDispatchHandler(Path("logs"))
        handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
        logging.getLogger().addHandler(handler)
    """

    def __init__(self, log_dir: Path):
        super().__init__()
        self.log_dir = log_dir
        self._file_cache: dict[str, TextIO] = {}
        self.addFilter(lambda record: is_first_party(record.name))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            log_name = module_to_log_name(record.name)

            if should_rotate(log_name):
                self._rotate_file(log_name)

            file = self._get_or_open_file(log_name)
            file.write(self.format(record) + "\n")
            file.flush()

        except Exception:
            self.handleError(record)

    def _rotate_file(self, log_name: str) -> None:
        existing_stream = self._file_cache.pop(log_name, None)
        self._file_cache[log_name] = _rotate_log_file(
            self.log_dir, log_name, existing_stream
        )

    def _get_or_open_file(self, log_name: str) -> TextIO:
        if log_name not in self._file_cache:
            path = self.log_dir / f"{log_name}.log"
            self._file_cache[log_name] = open(path, "a", encoding="utf-8")
        return self._file_cache[log_name]

    def close(self) -> None:
        """Close all cached file handles."""
        self.acquire()
        try:
            for file in self._file_cache.values():
                try:
                    file.close()
                except OSError:
                    pass  # Best effort
            self._file_cache.clear()
        finally:
            self.release()
        super().close()


class ThirdPartyHandler(logging.FileHandler):
    """Handler writing all library records to ``run-3p.log``."""

    LOG_NAME = "run-3p"

    def __init__(self, log_dir: Path, **kwargs):
        self.log_dir = log_dir
        super().__init__(
            log_dir / f"{self.LOG_NAME}.log", mode="a", encoding="utf-8", **kwargs
        )
        self.addFilter(lambda record: not is_first_party(record.name))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if should_rotate(self.LOG_NAME):
                self.stream = _rotate_log_file(self.log_dir, self.LOG_NAME, self.stream)

            super().emit(record)

        except Exception:
            self.handleError(record)
