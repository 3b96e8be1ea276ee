"""File mappings: validation, relocation and directory discovery."""

from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from bundler.model.types import Mapping, MappingError


def normalise_destination(destination: str) -> str:
    """Return ``destination`` as a clean relative POSIX path.

    Raises:
        MappingError: If the path is empty, absolute, or climbs out via ``..``.
    """
    posix = destination.replace("\\", "/")
    path = PurePosixPath(posix)
    if path.is_absolute() or (len(posix) > 1 and posix[1] == ":"):
        raise MappingError(f"Mapping destination must be relative: {destination}")

    parts = [p for p in path.parts if p not in ("", ".")]
    if not parts:
        raise MappingError(f"Mapping destination is empty: {destination!r}")
    if ".." in parts:
        raise MappingError(
            f"Mapping destination escapes the component directory: {destination}"
        )
    return "/".join(parts)


def validate_mappings(mappings: Iterable[Mapping]) -> list[Mapping]:
    """Normalise every destination and reject clashes.

    A destination clashes when it repeats another one or when it is the
    parent directory of another one (a file cannot also be a folder).

    Returns new Mapping objects in the order given.
    """
    seen: dict[str, Path] = {}
    result: list[Mapping] = []
    for mapping in mappings:
        dest = normalise_destination(mapping.destination)
        if dest in seen:
            raise MappingError(
                f"Duplicate mapping destination '{dest}' "
                f"(from {seen[dest]} and {mapping.source})"
            )
        seen[dest] = mapping.source
        result.append(Mapping(mapping.source, dest))

    parents: dict[str, str] = {}
    for dest in seen:
        parts = dest.split("/")
        for i in range(1, len(parts)):
            parents.setdefault("/".join(parts[:i]), dest)
    for dest, source in seen.items():
        if dest in parents:
            raise MappingError(
                f"Mapping destination '{dest}' (from {source}) is also the "
                f"parent directory of '{parents[dest]}'"
            )

    return result


def relocate(mappings: Iterable[Mapping], prefix: str) -> list[Mapping]:
    """Place every mapping under ``prefix/``."""
    return [Mapping(m.source, f"{prefix}/{m.destination}") for m in mappings]


def directory_mappings(root: Path) -> list[Mapping]:
    """Map every regular file under ``root`` to its relative path, sorted.

    Raises:
        NotADirectoryError: If ``root`` is not a directory.
    """
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    found = [
        Mapping(p, p.relative_to(root).as_posix())
        for p in root.rglob("*")
        if p.is_file()
    ]
    found.sort(key=lambda m: m.destination)
    return found
