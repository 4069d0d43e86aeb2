"""kubedepscan - Kubernetes deprecated API scanner.

Walks a project tree and reports manifests and Go sources that still use
deprecated or removed Kubernetes APIs.
"""

from kubedepscan.version import __version__


__all__ = ["__version__"]
