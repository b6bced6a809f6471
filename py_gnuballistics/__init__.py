"""Small arms exterior ballistics: zero angle search and trajectory tables."""

import importlib.metadata

__version__ = importlib.metadata.version("py-gnuballistics")

# Standard library imports
import os
import sys

# Third-party imports
from typing_extensions import Optional

# Local imports
from .engines.base_engine import BaseEngineConfigDict, set_default_engine_config
from .logger import logger as log

if sys.version_info[:2] < (3, 11):
    import tomli as tomllib
else:
    import tomllib


def _load_config(filepath: Optional[str] = None, suppress_warnings: bool = False) -> None:
    """Load engine defaults from a .pygb.toml file.

    Args:
        filepath: Path to configuration file. If None, searches for .pygb.toml or pygb.toml
        suppress_warnings: If True, suppress warning messages
    """
    def find_pygb_toml(start_dir: str = os.getcwd()) -> Optional[str]:
        """Search for a .pygb.toml or pygb.toml file from `start_dir` up to the filesystem root."""
        current_dir = os.path.abspath(start_dir)
        while True:
            for pygb_path in (os.path.join(current_dir, '.pygb.toml'),
                              os.path.join(current_dir, 'pygb.toml')):
                if os.path.exists(pygb_path):
                    return os.path.abspath(pygb_path)

            parent_dir = os.path.dirname(current_dir)
            if parent_dir == current_dir:
                return None
            current_dir = parent_dir

    if filepath is None:
        if (filepath := find_pygb_toml()) is None:
            filepath = find_pygb_toml(os.path.dirname(__file__))

    if filepath is not None:
        log.debug(f"Found {os.path.basename(filepath)} at {os.path.dirname(filepath)}")

        with open(filepath, "rb") as fp:
            _config = tomllib.load(fp)

        if _pygb := _config.get('pygb'):
            if engine_config := _pygb.get('engine'):
                set_default_engine_config(engine_config)
            elif not suppress_warnings:
                log.warning("Config has no `pygb.engine` section")
        elif not suppress_warnings:
            log.warning("Config has no `pygb` section")

    log.debug("Engine defaults load success")


def _basic_config(filename: Optional[str] = None,
                  engine_config: Optional[BaseEngineConfigDict] = None,
                  suppress_warnings: bool = False) -> None:
    """Load engine defaults from file or Mapping.

    Args:
        filename: Configuration file path
        engine_config: Dictionary of BaseEngineConfig overrides
        suppress_warnings: If True, suppress warning messages

    Raises:
        ValueError: If both filename and engine_config are provided
    """
    if filename and engine_config:
        raise ValueError("Can't use engine_config and config file at same time")
    if not filename and engine_config:
        set_default_engine_config(engine_config)
    else:
        # trying to load definitions from pygb.toml
        _load_config(filename, suppress_warnings)


basicConfig = _basic_config

basicConfig()


from .conditions import Atmo, Wind, atmospheric_correction, head_wind, cross_wind, windage
from .drag_model import Retardation, RetardationStatus, find_band, retard
from .drag_tables import (DragFunction, RetardationBand, TableG1, TableG2, TableG5, TableG6, TableG7, TableG8,
                          get_drag_tables_names)
from .engines import (create_base_engine_config, reset_default_engine_config, BaseEngineConfig,
                      DEFAULT_BASE_ENGINE_CONFIG, BaseIntegrationEngine, TrapezoidIntegrationEngine)
from .exceptions import (InputValidationError, UndefinedDragFunctionError, SolverRuntimeError,
                         ZeroFindingError, DragDomainError)
from .interface import Calculator, _EngineLoader
from .logger import logger, enable_file_logging, disable_file_logging
from .trajectory_data import IntegrationStatus, Solution, TabulationResult, ZeroFindingResult
from .unit import deg_to_rad, rad_to_deg, deg_to_moa, moa_to_deg, moa_to_rad, rad_to_moa

# DRY: build __all__ from global symbols
_SKIP_GLOBALS = {
    # Skip Python builtins
    "__name__", "__doc__", "__package__", "__loader__", "__spec__",
    "__file__", "__cached__", "__builtins__",
    # Skip imported modules
    "tomllib", "sys", "os", "importlib", "log",
    # Skip private/internal symbols
    "_load_config", "_basic_config",
}
__all__ = [
    name for name in globals()
    if not name.startswith("_") and name not in _SKIP_GLOBALS
]
