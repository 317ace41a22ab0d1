"""Progress logging helpers for cleaner console output."""

import logging


class CleanFormatter(logging.Formatter):
    """Formatter that renders progress records with short markers."""

    def format(self, record):
        module = record.name.split('.')[-1]
        progress_type = getattr(record, 'progress_type', None)

        if progress_type == 'start':
            return f"🚀 {module}: {record.getMessage()}"
        if progress_type == 'update':
            return f"   ▶ {record.getMessage()}"
        if progress_type == 'complete':
            return f"✅ {module}: {record.getMessage()}"

        if record.levelname == 'ERROR':
            message = f"❌ ERROR | {module}: {record.getMessage()}"
        elif record.levelname == 'WARNING':
            message = f"⚠️  WARN | {module}: {record.getMessage()}"
        else:
            message = f"{record.levelname:5s} | {module}: {record.getMessage()}"
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)
        return message


def _log_progress(logger: logging.Logger, progress_type: str, message: str) -> None:
    logger.info(message, extra={'progress_type': progress_type})


def log_start(logger: logging.Logger, message: str):
    """Log the start of a task."""
    _log_progress(logger, 'start', message)


def log_update(logger: logging.Logger, message: str):
    """Log a progress update."""
    _log_progress(logger, 'update', message)


def log_complete(logger: logging.Logger, message: str):
    """Log task completion."""
    _log_progress(logger, 'complete', message)
