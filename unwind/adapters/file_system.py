#!/usr/bin/env python3
"""Filesystem adapter raising classified conditions."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import IO

from ..error_handling.condition import ConditionRaised, ErrorCondition, raise_condition
from ..error_handling.kinds import ErrorKind
from ..utils.logger import get_logger

logger = get_logger(__name__)


class WriteHandle:
    """Exclusive write handle; the claim on the path lasts until ``close``"""

    def __init__(self, adapter: FileSystemAdapter, path: Path, stream: IO[bytes]):
        self.path = path
        self._adapter = adapter
        self._stream = stream

    @property
    def closed(self) -> bool:
        return self._stream.closed

    def write(self, data: bytes | str, encoding: str = "utf-8") -> int:
        if isinstance(data, str):
            data = data.encode(encoding)
        return self._stream.write(data)

    def write_byte(self, value: int) -> None:
        self._stream.write(bytes([value]))

    def close(self) -> None:
        if self.closed:
            return
        self._stream.close()
        self._adapter._release(self.path)

    def __enter__(self) -> WriteHandle:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False


class FileSystemAdapter:
    """
    Provide a minimal filesystem access abstraction

    Writers are exclusive per adapter: opening a path that is still held by an
    unclosed handle fails with ACCESS_CONFLICT, so a handle must be closed
    before the same path can be reopened.
    """

    def __init__(self):
        self._writers: set[Path] = set()
        self._lock = threading.Lock()

    @staticmethod
    def _normalize(path: str | Path) -> Path:
        return Path(path).expanduser().absolute()

    def _check_parent(self, file_path: Path) -> None:
        if not file_path.parent.is_dir():
            raise_condition(
                ErrorKind.DIRECTORY_NOT_FOUND,
                f"Could not find a part of the path '{file_path}'",
                path=str(file_path),
            )

    def _release(self, file_path: Path) -> None:
        with self._lock:
            self._writers.discard(file_path)
        logger.debug(f"Released write claim on {file_path}")

    def is_open(self, path: str | Path) -> bool:
        with self._lock:
            return self._normalize(path) in self._writers

    def open_write(self, path: str | Path) -> WriteHandle:
        """
        Open a file for exclusive writing

        Raises:
            ConditionRaised: DIRECTORY_NOT_FOUND, ACCESS_CONFLICT or another
                IO_FAILURE specialization
        """
        file_path = self._normalize(path)
        with self._lock:
            if file_path in self._writers:
                raise_condition(
                    ErrorKind.ACCESS_CONFLICT,
                    f"The process cannot access the file '{file_path}' because it is being used",
                    path=str(file_path),
                )
            self._check_parent(file_path)
            try:
                stream = file_path.open("wb")
            except OSError as exc:
                raise ConditionRaised(ErrorCondition.from_exception(exc, path=str(file_path))) from exc
            self._writers.add(file_path)

        return WriteHandle(self, file_path, stream)

    def write_text(self, path: str | Path, data: str, *, encoding: str = "utf-8") -> None:
        handle = self.open_write(path)
        try:
            handle.write(data, encoding=encoding)
        finally:
            handle.close()

    def read_text(self, path: str | Path, encoding: str = "utf-8") -> str:
        """
        Read a text file

        Raises:
            ConditionRaised: DIRECTORY_NOT_FOUND, FILE_NOT_FOUND or another
                IO_FAILURE specialization
        """
        file_path = self._normalize(path)
        self._check_parent(file_path)
        try:
            return file_path.read_text(encoding=encoding)
        except OSError as exc:
            raise ConditionRaised(ErrorCondition.from_exception(exc, path=str(file_path))) from exc


default_file_system = FileSystemAdapter()
