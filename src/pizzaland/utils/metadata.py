from importlib import metadata as importlib_metadata

DISTRIBUTION_NAME = "pizzaland"


def get_project_name() -> str:
    return DISTRIBUTION_NAME


def get_project_version(default: str = "0.0.0+unknown") -> str:
    """Installed version of the distribution, or ``default`` when running from a bare checkout."""
    try:
        return importlib_metadata.version(DISTRIBUTION_NAME)
    except importlib_metadata.PackageNotFoundError:
        return default
