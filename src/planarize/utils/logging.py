"""Logging utilities for planarize."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers added by configure_logging, removed again on the next call
_installed_handlers: list[logging.Handler] = []


@dataclass
class ImportStats:
    """Statistics from one import run."""

    stage: str = "start"
    point_count: int = 0
    face_count: int = 0
    inlier_fraction: float | None = None
    loop_count: int = 0
    hole_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate import duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def succeeded(self) -> bool:
        """True once the import reached its final stage."""
        return self.stage == "done"


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Replace handlers from a previous call instead of stacking them
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)
    _installed_handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("planarize")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class ImportLogger:
    """Logger for tracking import progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger, source: str = "<memory>") -> None:
        self._logger = logger.bind(source=source)
        self._stats = ImportStats()

    def log_start(self, point_count: int, face_count: int, start_time: float) -> None:
        """Log start of an import."""
        self._stats.point_count = point_count
        self._stats.face_count = face_count
        self._stats.start_time = start_time
        self._logger.debug("Import started", points=point_count, faces=face_count)

    def log_stage(self, stage: str) -> None:
        """Log a pipeline stage transition."""
        self._logger.debug("Entering stage", stage=stage)
        self._stats.stage = stage

    def log_plane_fit(
        self,
        normal: list[float],
        offset: float,
        inlier_fraction: float,
        flipped: bool,
    ) -> None:
        """Log plane estimation results."""
        self._logger.info(
            "Plane fitted",
            normal=[round(v, 6) for v in normal],
            offset=round(offset, 6),
            inlier_fraction=round(inlier_fraction, 4),
            flipped=flipped,
        )
        self._stats.inlier_fraction = inlier_fraction

    def log_boundaries(self, loop_count: int, hole_count: int, stray_count: int) -> None:
        """Log boundary extraction and classification results."""
        self._logger.info(
            "Boundaries extracted",
            loops=loop_count,
            holes=hole_count,
            stray=stray_count,
        )
        if stray_count:
            self._logger.warning("Holes outside the outer boundary", stray=stray_count)
        self._stats.loop_count = loop_count
        self._stats.hole_count = hole_count

    def log_complete(self, end_time: float) -> None:
        """Log successful import."""
        self._stats.end_time = end_time
        self._stats.stage = "done"
        self._logger.info(
            "Import complete",
            duration_ms=round(self._stats.duration_seconds * 1000, 2),
        )

    def log_failure(self, stage: str, error: Exception, end_time: float) -> None:
        """Log an import failure."""
        self._logger.warning(
            "Import failed",
            stage=stage,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.end_time = end_time
        self._stats.stage = "failed"
        self._stats.errors.append((stage, str(error)))

    @property
    def stats(self) -> ImportStats:
        """Get current import statistics."""
        return self._stats
