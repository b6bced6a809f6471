"""Logging for the py_gnuballistics library.

All library messages go through the ``py_gnuballistics`` logger.  The engines report
trial and step counts at DEBUG, and non-converged zero searches and tabulations stopped by
the drag tables at WARNING.  A console handler at INFO is installed on import.

A single optional file handler can be attached to keep the DEBUG trail of long runs:

    ```python
    from py_gnuballistics.logger import enable_file_logging, disable_file_logging

    enable_file_logging("zero_search.log")
    # ... zero searches and tabulations ...
    disable_file_logging()
    ```
"""
import logging
from typing import Optional

__all__ = ('logger',
           'enable_file_logging',
           'disable_file_logging',
)

console_handler = logging.StreamHandler()
console_handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))

logger: logging.Logger = logging.getLogger('py_gnuballistics')
logger.addHandler(console_handler)
logger.setLevel(logging.INFO)

# Attached by enable_file_logging, None otherwise
file_handler: Optional[logging.FileHandler] = None


def enable_file_logging(filename: str = "py_gnuballistics.log", level: int = logging.DEBUG) -> logging.FileHandler:
    """Append library messages at `level` and above to `filename`.

    The logger itself is lowered to `level` if needed, so DEBUG records reach the file;
    the console handler keeps showing INFO and above.  A previously attached file is
    closed first.

    Returns:
        The attached handler.
    """
    global file_handler
    disable_file_logging()

    file_handler = logging.FileHandler(filename)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(module)s:%(message)s"))
    logger.addHandler(file_handler)
    if logger.getEffectiveLevel() > level:
        logger.setLevel(level)
        console_handler.setLevel(logging.INFO)
    return file_handler


def disable_file_logging() -> None:
    """Detach and close the file handler; no-op when none is attached."""
    global file_handler
    if file_handler is not None:
        logger.removeHandler(file_handler)
        file_handler.close()
        file_handler = None
