import sys
import os
from loguru import logger

# Flag to track if logging has been configured
_logging_configured = False


def setup_logging(level="WARNING", suppress_console=False, enable_file_logging=None, force=False):
    """
    Configures the global logger.

    Console logging goes to stderr so it never mixes with the one-line
    confirmations the CLI prints. File logging is opt-in via
    AVIATORS_FILE_LOGGING=1 or enable_file_logging=True.

    Args:
        level: Console logging level (default: WARNING)
        suppress_console: If True, no console sink is installed.
        enable_file_logging: If True, enable file logging. If None, check AVIATORS_FILE_LOGGING env var.
        force: Reconfigure even if logging was already set up (used by --verbose).
    """
    global _logging_configured

    # Only configure once to avoid duplicate handlers
    if _logging_configured and not force:
        return
    _logging_configured = True

    logger.remove()

    if not suppress_console:
        logger.add(
            sys.stderr,
            level=level,
            format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
            colorize=True
        )

    if enable_file_logging is None:
        enable_file_logging = os.getenv("AVIATORS_FILE_LOGGING", "").lower() in ("1", "true", "yes")

    if enable_file_logging:
        from aviators.paths import get_paths
        paths = get_paths()
        paths.ensure_dirs()

        logger.add(
            paths.logs_dir / "aviators.log",
            level="DEBUG",
            rotation="5 MB",
            retention="7 days",
            compression="gz",
            catch=True,
            serialize=False
        )


setup_logging()
