from pathlib import Path

from .manifest import ProjectManifest


def discover_source_files(root: Path, manifest: ProjectManifest) -> list[Path]:
    extension = manifest.sources.extension
    if not extension.startswith("."):
        extension = "." + extension

    files: list[Path] = []
    for rel in manifest.sources.paths:
        base = (root / rel).resolve()
        if not base.exists():
            continue
        if base.is_file():
            files.append(base)
            continue
        for p in base.rglob(f"*{extension}"):
            files.append(p)
    return sorted(set(files))
