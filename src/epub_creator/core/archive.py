"""Zip archive sink for the finished package."""

import logging
import tempfile
import zipfile
from dataclasses import dataclass
from pathlib import Path

from epub_creator.errors import PackageIOError

log = logging.getLogger(__name__)


@dataclass
class ArchiveEntry:
    """A named entry waiting to be written."""

    name: str
    data: bytes | None = None
    source: Path | None = None
    compress: bool = True


class ArchiveWriter:
    """Collect entries, then write them to a zip in one pass.

    The archive is written to a temporary file beside the output and only
    moved into place once every entry has been written.
    """

    def __init__(self, output_path: Path):
        self.output_path = output_path
        self.entries: list[ArchiveEntry] = []
        self._names: set[str] = set()

    def _register(self, entry: ArchiveEntry) -> None:
        if entry.name in self._names:
            raise PackageIOError(f"Duplicate archive entry: {entry.name}", path=entry.name)
        self._names.add(entry.name)
        self.entries.append(entry)

    def add(self, name: str, data: bytes | str, compress: bool = True) -> None:
        """Register an in-memory entry."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._register(ArchiveEntry(name=name, data=data, compress=compress))

    def add_file(self, name: str, source: Path) -> None:
        """Register an entry whose bytes are read from source at finalize()."""
        self._register(ArchiveEntry(name=name, source=source))

    def finalize(self) -> Path:
        """Write all entries and move the archive into place."""
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_handle = tempfile.NamedTemporaryFile(
                prefix=f"{self.output_path.stem}.",
                suffix=".tmp",
                dir=str(self.output_path.parent),
                delete=False,
            )
        except OSError as e:
            raise PackageIOError(
                f"Cannot create output in {self.output_path.parent}: {e}",
                path=str(self.output_path),
            ) from e
        tmp_path = Path(tmp_handle.name)
        tmp_handle.close()

        try:
            with zipfile.ZipFile(tmp_path, "w", zipfile.ZIP_DEFLATED) as zf:
                for entry in self.entries:
                    compress_type = zipfile.ZIP_DEFLATED if entry.compress else zipfile.ZIP_STORED
                    if entry.source is not None:
                        zf.write(entry.source, entry.name, compress_type=compress_type)
                    else:
                        zf.writestr(entry.name, entry.data or b"", compress_type=compress_type)
                    log.debug(f"Wrote {entry.name}")
            tmp_path.replace(self.output_path)
        except OSError as e:
            raise PackageIOError(
                f"Failed writing {self.output_path}: {e}", path=str(self.output_path)
            ) from e
        finally:
            if tmp_path.exists():
                tmp_path.unlink(missing_ok=True)

        log.info(f"Wrote {len(self.entries)} entries to {self.output_path}")
        return self.output_path
