"""Top-level package for the Student Result Portal.

Provides subpackages:
- result_portal.core – immutable record models, scoring, schemas, serialization
- result_portal.registry – storage slots, record store, import reconciliation
- result_portal.projection – filtered/sorted/paginated list views
- result_portal.output – detail view, CSV and printable PDF output
- result_portal.app – preferences, paths, logging and the command line
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    import sys
    from pathlib import Path
    
    # In dev mode, read directly from pyproject.toml
    if not getattr(sys, 'frozen', False):
        pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    else:
        pyproject = Path(getattr(sys, "_MEIPASS", ".")) / "pyproject.toml"
    
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.1"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass
    
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("result-portal")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
