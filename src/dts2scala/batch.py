"""Directory driver: convert every .d.ts under a root into a mirrored output tree."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from . import convert
from .errors import ConvertError

logger = logging.getLogger(__name__)

DECLARATION_SUFFIX: str = ".d.ts"
OUTPUT_SUFFIX: str = ".d.ts.scala"


@dataclass
class BatchResult:
    converted: list[Path] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.converted) + len(self.failed)


def find_declaration_files(root: Path) -> list[Path]:
    """All .d.ts files below root, sorted for a stable conversion order."""
    return sorted(p for p in root.rglob("*" + DECLARATION_SUFFIX) if p.is_file())


def _relative_stem(path: Path, root: Path) -> str:
    rel = path.relative_to(root).as_posix()
    if rel.endswith(DECLARATION_SUFFIX):
        return rel[: -len(DECLARATION_SUFFIX)]
    return rel


def package_name_for(path: Path, root: Path) -> str:
    """lib/foo-bar.d.ts under root -> lib.foo_bar."""
    name = re.sub(r"[/\\]", ".", _relative_stem(path, root))
    return re.sub(r"[^a-zA-Z0-9_.]", "_", name)


def output_path_for(path: Path, root: Path, out_dir: Path) -> Path:
    return out_dir / (_relative_stem(path, root) + OUTPUT_SUFFIX)


def convert_file(path: Path, root: Path, out_dir: Path) -> Path:
    """Convert one file and write it under out_dir. Returns the written path."""
    source = path.read_text(encoding="utf-8")
    output = convert(source, package_name_for(path, root))
    target = output_path_for(path, root, out_dir)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(output, encoding="utf-8")
    return target


def convert_directory(root: Path, out_dir: Path) -> BatchResult:
    """Convert every declaration file; a failing file is recorded and skipped."""
    result = BatchResult()
    for path in find_declaration_files(root):
        try:
            target = convert_file(path, root, out_dir)
        except (ConvertError, OSError, UnicodeDecodeError) as e:
            logger.info("failed %s: %s", path, e)
            result.failed.append((path, str(e)))
            continue
        logger.info("converted %s -> %s", path, target)
        result.converted.append(target)
    return result
