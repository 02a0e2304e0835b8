from pathlib import PurePath


def archive_file_name(package_id: str, version: str, extension: str) -> str:
    """
    Name of a package archive as stored by the feed.

    The feed's storage is case-sensitive by path and only serves the
    lower-cased form, so every component is lower-cased.
    """
    return f"{package_id.lower()}.{version.lower()}.{extension.lower().lstrip('.')}"


def archive_url(base_address: str, package_id: str, version: str, extension: str) -> str:
    if not base_address.endswith("/"):
        base_address = base_address + "/"
    pid = package_id.lower()
    ver = version.lower()
    return f"{base_address}{pid}/{ver}/{archive_file_name(package_id, version, extension)}"


def is_cli_extension(file_name: str, prefix: str) -> bool:
    return PurePath(file_name).name.startswith(prefix)


def command_name(file_name: str) -> str:
    """
    Command a user types for an entry point, i.e. the file name without extension.
    """
    return PurePath(file_name).stem
