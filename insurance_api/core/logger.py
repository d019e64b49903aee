"""
Structured logger for the Insurance Product Service with correlation ID support
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from insurance_api.core.config import config
from insurance_api.core.context import get_correlation_id


def format_log_entry(entry: Dict[str, Any], fmt: str) -> str:
    """
    Render a log entry either as a single JSON document or a console line
    """
    if fmt == "json":
        return json.dumps(entry, default=str)

    extras = {
        k: v for k, v in entry.items()
        if k not in ("timestamp", "level", "service", "version", "environment", "correlationId", "message")
    }
    line = f"{entry['timestamp']} [{entry['level']}] {entry['service']}"
    if entry.get("correlationId"):
        line += f" [{entry['correlationId']}]"
    line += f": {entry['message']}"
    if extras:
        line += f" | {json.dumps(extras, default=str)}"
    return line


class ServiceLogger:
    """
    Logger emitting structured entries through the standard logging handlers
    """
    
    def __init__(self, name: str = "insurance_api"):
        self.config = {
            "level": config.log_level.upper(),
            "format": config.log_format.lower(),
            "toConsole": config.log_to_console,
            "toFile": config.log_to_file,
            "filePath": config.log_file_path,
        }
        self.service_info = {
            "service": config.service_name,
            "version": config.service_version,
            "environment": config.environment,
        }
        self._logger = logging.getLogger(name)
        self._setup_python_logging()
    
    def _setup_python_logging(self):
        """
        Set up Python logging handlers for this logger
        """
        self._logger.handlers.clear()
        self._logger.propagate = False
        self._logger.setLevel(getattr(logging, self.config["level"], logging.INFO))
        
        if self.config["toConsole"]:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(logging.Formatter("%(message)s"))
            self._logger.addHandler(console_handler)
        
        if self.config["toFile"]:
            log_dir = os.path.dirname(self.config["filePath"])
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(self.config["filePath"])
            file_handler.setFormatter(logging.Formatter("%(message)s"))
            self._logger.addHandler(file_handler)
    
    def _build_entry(
        self,
        level: str,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs
    ) -> Dict[str, Any]:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            **self.service_info,
            "correlationId": get_correlation_id(),
            "message": message,
        }
        entry.update(metadata or {})
        entry.update(kwargs)
        return entry
    
    def _log(
        self,
        level: str,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: bool = False,
        **kwargs
    ):
        """
        Internal logging method
        """
        levelno = getattr(logging, level)
        if not self._logger.isEnabledFor(levelno):
            return
        
        entry = self._build_entry(level, message, metadata, **kwargs)
        self._logger.log(levelno, format_log_entry(entry, self.config["format"]), exc_info=exc_info)
    
    @staticmethod
    def _with_error(
        metadata: Optional[Dict[str, Any]],
        error: Optional[Union[str, Exception]]
    ) -> Dict[str, Any]:
        metadata = dict(metadata or {})
        if error:
            if isinstance(error, Exception):
                metadata["error"] = {
                    "type": type(error).__name__,
                    "message": str(error),
                }
            else:
                metadata["error"] = {"message": str(error)}
        return metadata
    
    def debug(self, message: str, metadata: Optional[Dict[str, Any]] = None, **kwargs):
        """Debug level logging"""
        self._log("DEBUG", message, metadata, **kwargs)
    
    def info(self, message: str, metadata: Optional[Dict[str, Any]] = None, **kwargs):
        """Info level logging"""
        self._log("INFO", message, metadata, **kwargs)
    
    def warning(self, message: str, metadata: Optional[Dict[str, Any]] = None, **kwargs):
        """Warning level logging"""
        self._log("WARNING", message, metadata, **kwargs)
    
    def error(
        self,
        message: str,
        error: Optional[Union[str, Exception]] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        """Error level logging"""
        self._log("ERROR", message, self._with_error(metadata, error), **kwargs)
    
    def critical(
        self,
        message: str,
        error: Optional[Union[str, Exception]] = None,
        metadata: Optional[Dict[str, Any]] = None,
        **kwargs
    ):
        """Critical level logging"""
        self._log("CRITICAL", message, self._with_error(metadata, error), **kwargs)


# Global logger instance
logger = ServiceLogger()
