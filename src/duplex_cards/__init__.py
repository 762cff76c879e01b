"""Top-level package for duplex-cards.

Lays out a deck of cards on double-sided sheets so the backs line up
behind the fronts after duplex printing.

Provides subpackages:
- duplex_cards.layout – pagination and back-side mirroring
- duplex_cards.loading – deck JSON ingest
- duplex_cards.templating – card fragment substitution
- duplex_cards.output – HTML assembly and PDF rendering
"""


def _get_version() -> str:
    """Get version from importlib.metadata (installed) or pyproject.toml (dev)."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version

    try:
        return pkg_version("duplex-cards")
    except PackageNotFoundError:
        pass

    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.0.0"


__version__ = _get_version()
__all__: list[str] = ["__version__"]
