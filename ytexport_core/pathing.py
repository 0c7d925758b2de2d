# ytexport_core/pathing.py
import os, sys
from typing import Optional


def bundle_root() -> str:
    """
    Folder that holds assets/: the frozen bundle dir (sys._MEIPASS) when
    packaged, otherwise the checkout root one level above ytexport_core.
    """
    frozen = getattr(sys, "_MEIPASS", None)
    if frozen:
        return frozen
    return os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def resource_path(rel_path: str) -> str:
    return os.path.join(bundle_root(), rel_path)


def find_resource(*candidates: str) -> Optional[str]:
    """
    First of `candidates` (paths relative to the bundle root) that exists.
    Used for the optional bundled chromedriver and the toolbar icons; None
    lets callers fall back to Selenium Manager or Qt's standard icons.
    """
    for rel in candidates:
        path = resource_path(rel)
        if os.path.exists(path):
            return path
    return None
