import importlib.metadata


def get_version_string() -> str:
    try:
        return importlib.metadata.version("textattrs")
    except importlib.metadata.PackageNotFoundError:
        # Running from a source checkout that was never installed
        return "unknown"
