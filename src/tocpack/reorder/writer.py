"""Write placements to a scratch directory and zip that directory."""

from __future__ import annotations

import os
import shutil
import zipfile
from pathlib import Path

from rich.markup import escape

from tocpack.errors import EntryWriteError, PackagingError
from tocpack.reorder.placement import Placement
from tocpack.utils.logging import get_logger

logger = get_logger()


def _target_path(workdir: Path, dest_path: str) -> Path:
    """Join `dest_path` under `workdir`, refusing paths that leave it."""
    target = (workdir / dest_path).resolve()
    root = workdir.resolve()
    if target == root or root not in target.parents:
        raise EntryWriteError(f"refusing to write '{dest_path}' outside {workdir}")
    return target


def materialize(placements: list[Placement], workdir: Path) -> list[Path]:
    """Write every placement under `workdir`, creating parent directories.

    Raises:
        EntryWriteError: A directory or file could not be created.
    """
    logger.trace(f"Entered materialize({workdir=}, {len(placements)} placements)")
    written: list[Path] = []
    for placement in placements:
        target = _target_path(workdir, placement.dest_path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise EntryWriteError(
                f"mkdir {target.parent} error, because {exc}"
            ) from exc
        try:
            with open(target, mode="wb") as dest_file:
                dest_file.write(placement.content)
        except OSError as exc:
            raise EntryWriteError(f"write {target} error, because {exc}") from exc
        written.append(target)
    return written


def _archive_name(path: Path, workdir: Path) -> str:
    name = path.relative_to(workdir).as_posix()
    if path.is_dir():
        name += "/"
    return name


def package_directory(workdir: Path, output: Path) -> Path:
    """Zip the contents of `workdir` into `output`.

    An existing `output` is replaced. Members are added in sorted walk order,
    directories with a trailing `/` and files deflated.

    Raises:
        PackagingError: The output could not be removed or written.
    """
    logger.trace(f"Entered package_directory({workdir=}, {output=})")
    try:
        output.unlink(missing_ok=True)
    except OSError as exc:
        raise PackagingError(f"can not remove old '{output}', because {exc}") from exc

    try:
        with zipfile.ZipFile(output, mode="w") as archive:
            for dirpath, dirnames, filenames in os.walk(workdir):
                dirnames.sort()
                current = Path(dirpath)
                if current != workdir:
                    info = zipfile.ZipInfo.from_file(
                        current, _archive_name(current, workdir), strict_timestamps=False
                    )
                    archive.writestr(info, b"")
                for filename in sorted(filenames):
                    path = current / filename
                    info = zipfile.ZipInfo.from_file(
                        path, _archive_name(path, workdir), strict_timestamps=False
                    )
                    info.compress_type = zipfile.ZIP_DEFLATED
                    with open(path, mode="rb") as src_file:
                        archive.writestr(info, src_file.read())
    except OSError as exc:
        output.unlink(missing_ok=True)
        raise PackagingError(f"write '{output}' error, because {exc}") from exc

    logger.trace(f"Wrote {output}")
    return output


def remove_workdir(workdir: Path) -> None:
    """Remove the scratch directory; failures are only logged."""
    shutil.rmtree(workdir, ignore_errors=True)
    if workdir.exists():
        logger.debug("Could not fully remove {path}", path=escape(str(workdir)))
