"""Top-level package for the PSRAS standards coverage & authority engine.

Provides subpackages:
- psras_toolkit.standards – standards loading and the flattened criterion index
- psras_toolkit.authorities – citation catalog, normalization, validation, attachment
- psras_toolkit.coverage – tag coverage, backlog, audit and exports
- psras_toolkit.loading – question-bank snapshot loading
"""


def _get_version() -> str:
    """Get version from importlib.metadata (installed) or 0.0.0 from a bare checkout."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        return pkg_version("psras_toolkit")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()
__all__: list[str] = ["__version__"]
