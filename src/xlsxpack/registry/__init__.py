from .package import PackagePartRegistry
from .plugin import PluginRegistry

__all__ = ["PackagePartRegistry", "PluginRegistry"]
