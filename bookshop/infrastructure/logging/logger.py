"""
Structured JSON logging for the shop components.

Every record is one JSON object. Context values from the domain are rendered
so they stay readable and exact: Decimal amounts as strings, enums by name,
receipts as objects and catalog items by their identifier.
"""

import json
import logging
from datetime import datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from bookshop.domain.interfaces.base import ILogger
from bookshop.domain.models.catalog import Publication
from bookshop.domain.models.configuration import StoreConfiguration


def to_json_value(value: Any) -> Any:
    """Convert a context value into something json.dumps renders faithfully."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, Decimal):
        # str keeps every digit; float() would not
        return str(value)
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Publication):
        return value.identifier
    if hasattr(value, '_asdict'):
        return {k: to_json_value(v) for k, v in value._asdict().items()}
    if isinstance(value, dict):
        return {str(k): to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_json_value(v) for v in value]
    return str(value)


class StructuredLogger:
    """Logger for one shop component; context keyword arguments end up in the JSON record."""

    def __init__(self, component: str, level: str = "INFO", log_file: Optional[str] = None):
        self.component = component
        self.logger = logging.getLogger(f"bookshop.{component}")
        self.logger.setLevel(getattr(logging, level.upper()))

        # Recreating a component logger replaces its handlers
        self.logger.handlers.clear()

        formatter = StructuredFormatter()

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        if log_file:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log(logging.CRITICAL, message, kwargs)

    def close(self) -> None:
        """Close the handlers, releasing any log file."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

    def _log(self, level: int, message: str, context: Dict[str, Any]) -> None:
        # An explicit component in the context overrides the logger's own
        component = context.pop('component', self.component)
        self.logger.log(level, message, extra={'component': component, 'context': context})


class StructuredFormatter(logging.Formatter):
    """Renders log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'component': getattr(record, 'component', 'unknown'),
            'message': record.getMessage(),
            'logger': record.name
        }

        context = getattr(record, 'context', None)
        if context:
            log_data['context'] = to_json_value(context)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


class LoggerFactory:
    """Creates component loggers from the store configuration."""

    @staticmethod
    def create_component_logger(component_name: str, config: StoreConfiguration) -> ILogger:
        """Logger named ``bookshop.<component>``, writing to ``<log_dir>/<component>.log`` if a log dir is set."""
        log_file = None
        if config.log_dir:
            log_file = str(Path(config.log_dir) / f"{component_name}.log")

        return StructuredLogger(component_name, config.log_level, log_file)
