"""Logging utilities for ContourPad."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_HANDLER_MARK = "_contourpad_handler"


@dataclass
class PipelineStats:
    """Statistics from a pipeline run."""

    boundary_points: int = 0
    path_points: int = 0
    path_closed: bool = False
    cross_sections: int = 0
    vertices: int = 0
    triangles: int = 0
    stage_timings_ms: dict[str, float] = field(default_factory=dict)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def slowest_stage(self) -> str | None:
        """Name of the stage that took longest, if any ran."""
        if not self.stage_timings_ms:
            return None
        return max(self.stage_timings_ms, key=self.stage_timings_ms.__getitem__)


def _reset_handlers(root_logger: logging.Logger) -> None:
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            root_logger.removeHandler(handler)
            handler.close()


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Calling this again replaces the handlers installed by the previous call.

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
    _reset_handlers(root_logger)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        setattr(file_handler, _HANDLER_MARK, True)
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(
        logging.ERROR if quiet else getattr(logging, console_level.upper())
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    setattr(console_handler, _HANDLER_MARK, True)
    root_logger.addHandler(console_handler)

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

    logger = structlog.get_logger("contourpad")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=console_level,
    )

    return logger


class PipelineLogger:
    """Logger for tracking pipeline stages and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = PipelineStats()

    def reset(self) -> PipelineStats:
        """Start a fresh statistics record for a new run."""
        self._stats = PipelineStats()
        return self._stats

    def log_run_start(self, width: int, height: int) -> None:
        """Log start of a pipeline run."""
        self._logger.info("Pipeline started", width=width, height=height)

    def log_stage_complete(self, stage: str, duration_ms: float, **counts: int) -> None:
        """Log completion of one pipeline stage."""
        self._logger.debug(
            "Stage complete",
            stage=stage,
            duration_ms=round(duration_ms, 2),
            **counts,
        )
        self._stats.stage_timings_ms[stage] = duration_ms

    def log_scan_angle(self, angle: float, new_points: int, duration_ms: float) -> None:
        """Log results of scanning one angle."""
        self._logger.debug(
            "Angle scanned",
            angle=angle,
            new_points=new_points,
            duration_ms=round(duration_ms, 2),
        )

    def log_thickness_fallback(self, requested: str, used: str) -> None:
        """Log an unknown thickness profile being replaced."""
        self._logger.warning(
            "Unknown thickness function, using fallback",
            requested=requested,
            used=used,
        )

    def log_run_error(self, error: Exception) -> None:
        """Log a failed pipeline run."""
        self._logger.error(
            "Pipeline failed",
            error=str(error),
            error_type=type(error).__name__,
        )

    def log_run_complete(self) -> None:
        """Log summary of a finished run."""
        self._logger.info(
            "Pipeline complete",
            boundary_points=self._stats.boundary_points,
            path_points=self._stats.path_points,
            closed=self._stats.path_closed,
            cross_sections=self._stats.cross_sections,
            vertices=self._stats.vertices,
            duration_seconds=round(self._stats.duration_seconds, 3),
        )

    @property
    def stats(self) -> PipelineStats:
        """Get current run statistics."""
        return self._stats
