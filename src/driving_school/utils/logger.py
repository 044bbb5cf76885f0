"""
Logging utilities with personal-data masking.

This module provides logging setup with:
- Configurable log levels and output destinations
- Log rotation for file handlers
- Masking of passwords, CPF numbers and e-mail addresses
- Structured log format
"""

import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


CPF_PATTERN = re.compile(r'\b\d{3}\.?\d{3}\.?\d{3}-?\d{2}\b')
EMAIL_PATTERN = re.compile(r'\b([A-Za-z0-9._%+-])[A-Za-z0-9._%+-]*@([A-Za-z0-9.-]+\.[A-Za-z]{2,})\b')


def mask_email(email: str) -> str:
    """
    Mask email address for safe logging.

    Examples:
        >>> mask_email("user@example.com")
        'u***@example.com'
        >>> mask_email("invalid")
        '***'
    """
    if not email or "@" not in email:
        return "***"

    local, domain = email.split("@", 1)
    masked_local = local[0] + "***" if len(local) > 0 else "***"
    return f"{masked_local}@{domain}"


def mask_cpf(cpf: str) -> str:
    """
    Mask a CPF, keeping only the check digits.

    Examples:
        >>> mask_cpf("123.456.789-00")
        '***.***.***-00'
    """
    digits = re.sub(r'\D', '', cpf or "")
    if len(digits) != 11:
        return "***"
    return f"***.***.***-{digits[-2:]}"


class SensitiveDataFilter(logging.Filter):
    """
    Logging filter that masks personal data before output.

    Student and instructor records carry CPF numbers and e-mail
    addresses; users carry passwords.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Mask sensitive data in the log record.

        Returns:
            Always True (allows all records through after masking)
        """
        message = record.getMessage()

        message = re.sub(
            r'password["\']?\s*[:=]\s*["\']?([^"\'\s,}]+)',
            r'password: ********',
            message,
            flags=re.IGNORECASE
        )
        message = CPF_PATTERN.sub(lambda m: mask_cpf(m.group(0)), message)
        message = EMAIL_PATTERN.sub(r'\1***@\2', message)

        record.msg = message
        record.args = None
        return True


def setup_logger(
    name: str = "driving_school",
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and configure a logger instance.

    Args:
        name: Logger name (default: "driving_school", the package root)
        level: Logging level (default: logging.INFO)
        log_file: Optional path to log file for file output

    Returns:
        Configured logger instance

    Examples:
        >>> logger = setup_logger()
        >>> logger.info("Scheduler started")

        >>> logger = setup_logger(level=logging.DEBUG, log_file="output/logs/app.log")
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s:%(funcName)s:%(lineno)d %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    sensitive_filter = SensitiveDataFilter()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(sensitive_filter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.addFilter(sensitive_filter)
        logger.addHandler(file_handler)

    return logger
