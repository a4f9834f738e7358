"""Version of iniread."""

import importlib.metadata

FALLBACK_VERSION = "0.3.0"


def version() -> str:
    try:
        return importlib.metadata.version("iniread")
    except importlib.metadata.PackageNotFoundError:
        return FALLBACK_VERSION


def print_version(args):
    print(version() if args.quiet else f"iniread version {version()}")
