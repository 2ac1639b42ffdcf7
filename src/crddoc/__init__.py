"""📚 crddoc - API reference docs for Kubernetes-style Go API types.

Quick Start:
    from crddoc import generate_package_docs

    print(generate_package_docs("api/v1"))

Command line:
    crddoc render api/v1 -o docs/api.md
    crddoc inspect api/v1
"""

from crddoc.docs.generator import generate_package_docs

__version__ = "0.3.0"

__all__ = ["generate_package_docs", "__version__"]
