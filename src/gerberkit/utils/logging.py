"""Logging utilities for gerberkit."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class CompileStats:
    """Statistics from a font compilation run."""

    glyph_count: int = 0
    computed_count: int = 0
    kept_count: int = 0
    mismatch_count: int = 0
    mismatches: list[tuple[str, str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate compilation duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
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

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
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

    logger = structlog.get_logger("gerberkit")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class CompileLogger:
    """Logger for tracking font compilation progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = CompileStats()

    def log_polarity_kept(self, glyph_key: str, polarity: str) -> None:
        """Log a glyph whose stored polarity string was usable."""
        self._logger.debug("Polarity kept", glyph=glyph_key, polarity=polarity)
        self._stats.glyph_count += 1
        self._stats.kept_count += 1

    def log_polarity_computed(
        self,
        glyph_key: str,
        polarity: str,
        duration_ms: float,
    ) -> None:
        """Log a freshly rasterized polarity string."""
        self._logger.debug(
            "Polarity computed",
            glyph=glyph_key,
            polarity=polarity,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.glyph_count += 1
        self._stats.computed_count += 1

    def log_polarity_mismatch(self, glyph_key: str, raster: str, analytic: str) -> None:
        """Log disagreement between raster and analytic polarity."""
        self._logger.warning(
            "Polarity mismatch, keeping raster result",
            glyph=glyph_key,
            raster=raster,
            analytic=analytic,
        )
        self._stats.mismatch_count += 1
        self._stats.mismatches.append((glyph_key, raster, analytic))

    @property
    def stats(self) -> CompileStats:
        """Get current compilation statistics."""
        return self._stats
