"""
Logging module - colored console output plus dated debug log files
"""
import sys
from pathlib import Path
from loguru import logger
from btc_dashboard.config import config


class ColoredLogger:
    """Colored logger wrapper"""

    def __init__(self, logger_instance):
        self._logger = logger_instance

    def __getattr__(self, name):
        """Forward everything else to the underlying logger"""
        return getattr(self._logger, name)

    def source(self, name: str, message: str, success: bool = True):
        """[SOURCE] adapter outcome (green on success, red on failure)"""
        icon = "📡" if success else "❌"
        color = "green" if success else "light-red"
        # error text may contain '<' from response bodies; escape it for color markup
        message = message.replace("<", r"\<")
        self._logger.opt(colors=True).info(f"<{color}>{icon} [{name}] {message}</{color}>")

    def cycle(self, message: str, degraded: bool = False):
        """[CYCLE] aggregation cycle summary (blue, yellow when degraded)"""
        color = "blue" if not degraded else "yellow"
        self._logger.opt(colors=True).info(f"<{color}>🔄 [Cycle] {message}</{color}>")

    def scheduler(self, message: str):
        """[SCHEDULER] timer lifecycle (magenta)"""
        self._logger.opt(colors=True).info(f"<magenta>⏱️ [Scheduler] {message}</magenta>")


def setup_logger():
    """Configure logging"""
    logger.remove()

    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=config.logging.get('level', 'INFO'),
        colorize=True
    )

    # logs/YYYY-MM-DD/debug.log
    log_file = config.logging.get('file', 'logs/dashboard.log')
    log_path = Path(log_file)
    debug_log_file = str(log_path.parent / "{time:YYYY-MM-DD}" / "debug.log")
    logger.add(
        debug_log_file,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
        level="DEBUG",
        rotation="00:00",
        retention="7 days",
        compression="zip"
    )

    return ColoredLogger(logger)


# Global logger instance
log = setup_logger()
