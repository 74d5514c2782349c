"""Loading of operator-supplied permission defaults.

A defaults document mirrors the permission tree: groups are JSON objects keyed
by child name and leaves are booleans, e.g.::

    {"music": {"play": true, "queue": {"clear": false}}}
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from ..core.exceptions import ConfigurationError


logger = logging.getLogger(__name__)


def load_defaults_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a JSON defaults document from disk.

    Raises:
        ConfigurationError: if the file is missing, unreadable, not JSON, or
            its top level is not an object.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as fp:
            data = json.load(fp)
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"Permission defaults file not found: {path}",
            details={"path": str(path)}
        ) from e
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Failed to read permission defaults from {path}: {e}",
            details={"path": str(path)}
        ) from e
    
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Permission defaults must be a JSON object, got {type(data).__name__}",
            details={"path": str(path)}
        )
    
    logger.info(f"Loaded permission defaults from {path}")
    return data
