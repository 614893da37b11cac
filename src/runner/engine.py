"""Batch translation runner.

Discovers page object documents under a source directory, translates them in
parallel and writes the generated source. Each page object is translated by
its own PageObjectTranslator; a failure is recorded in that page object's
result and never stops the others.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path

from src.translator import translate_page_object, write_page_object
from src.translator.errors import CompilerError

from .config import RunnerConfig

logger = logging.getLogger(__name__)

DOCUMENT_SUFFIXES = (".utam.json", ".json")


@dataclass
class CompileResult:
    """Outcome of compiling one page object document."""

    source: Path
    name: str
    package: str
    status: str  # "success" or "error"
    files: list[Path] = field(default_factory=list)
    error: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.package}.{self.name}" if self.package else self.name


@dataclass
class CompileSummary:
    """Outcome of a batch run, results ordered by source path."""

    results: list[CompileResult] = field(default_factory=list)

    @property
    def succeeded(self) -> list[CompileResult]:
        return [r for r in self.results if r.status == "success"]

    @property
    def failed(self) -> list[CompileResult]:
        return [r for r in self.results if r.status == "error"]

    @property
    def is_success(self) -> bool:
        return len(self.failed) == 0


def page_object_name(file_name: str) -> str:
    """Type name for a document file, e.g. ``nav-menu.utam.json`` -> ``NavMenu``."""
    stem = file_name
    for suffix in DOCUMENT_SUFFIXES:
        if stem.endswith(suffix):
            stem = stem[: -len(suffix)]
            break
    parts = [part for part in stem.replace("_", "-").split("-") if part]
    return "".join(part[0].upper() + part[1:] for part in parts)


class TranslatorRunner:
    """Runs page object translation for a directory tree."""

    def __init__(self, config: RunnerConfig):
        """Initialize runner.

        Args:
            config: Source and output locations, package naming, parallelism
        """
        self.config = config

    def discover(self) -> list[Path]:
        """Find page object documents under the source directory."""
        found: set[Path] = set()
        for pattern in self.config.file_patterns:
            found.update(self.config.source_dir.rglob(pattern))
        return sorted(found)

    def identity(self, path: Path) -> tuple[str, str]:
        """Generated type name and package for a document.

        Subdirectories of the source directory become package segments.
        """
        relative = path.relative_to(self.config.source_dir)
        segments = [self.config.base_package] if self.config.base_package else []
        segments.extend(part.lower() for part in relative.parent.parts)
        return page_object_name(path.name), ".".join(segments)

    def compile_file(self, path: Path) -> CompileResult:
        """Translate and write one document, capturing any failure."""
        name, package = self.identity(path)
        result = CompileResult(source=path, name=name, package=package, status="success")
        try:
            ir = translate_page_object(path.read_bytes(), name, package)
            result.files = write_page_object(ir, self.config.output_dir)
        except (CompilerError, OSError) as e:
            logger.error(f"Failed to compile {path}: {e}")
            result.status = "error"
            result.error = str(e)
            return result

        logger.info(f"Compiled {path} -> {result.full_name}")
        return result

    def run(self) -> CompileSummary:
        """Compile every discovered document.

        Returns:
            CompileSummary with one result per document
        """
        paths = self.discover()
        logger.info(
            f"Compiling {len(paths)} page object(s) from {self.config.source_dir} "
            f"with {self.config.max_workers} worker(s)"
        )

        results = []
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = {executor.submit(self.compile_file, path): path for path in paths}
            for future in as_completed(futures):
                results.append(future.result())

        summary = CompileSummary(results=sorted(results, key=lambda r: r.source))
        logger.info(
            f"Compiled {len(summary.succeeded)} page object(s), {len(summary.failed)} failed"
        )
        return summary
