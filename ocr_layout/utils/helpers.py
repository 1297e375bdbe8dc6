"""
Helper Utilities Module.

Generic helpers shared by the engine, the batch shell and the
command-line entry point.

Functions:
    - ensure_directory: Create directory if it doesn't exist
    - get_file_extension: Extract file extension safely
    - collect_image_files: Expand a file or directory into image paths
    - image_display_name: Human-readable name for one batch item
"""

from pathlib import Path
from typing import Any, Iterable, List, Union

from .exceptions import UnsupportedFileTypeError


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Extract the file extension from a filepath.

    Returns the extension in lowercase, including the dot.

    Example:
        >>> get_file_extension("scan.PNG")
        ".png"
        >>> get_file_extension("noextension")
        ""
    """
    return Path(filepath).suffix.lower()


def collect_image_files(
    input_path: Union[str, Path],
    extensions: Iterable[str]
) -> List[Path]:
    """
    Expand an input path into the list of image files to recognize.

    A single file must carry a supported extension. A directory is
    scanned (non-recursively) and its matching files are returned
    sorted by name.

    Args:
        input_path: File or directory.
        extensions: Supported extensions including the dot.

    Returns:
        Sorted list of image paths.

    Raises:
        FileNotFoundError: If the path does not exist.
        UnsupportedFileTypeError: If a single file has another extension.
    """
    path = Path(input_path)
    supported = {ext.lower() for ext in extensions}

    if not path.exists():
        raise FileNotFoundError(f"Input path not found: {path}")

    if path.is_file():
        ext = get_file_extension(path)
        if ext not in supported:
            raise UnsupportedFileTypeError(ext, sorted(supported))
        return [path]

    return sorted(
        p for p in path.iterdir()
        if p.is_file() and get_file_extension(p) in supported
    )


def image_display_name(image: Any, index: int) -> str:
    """
    Return the name used for an image in logs and failure markers.

    Paths use their file name, PIL images their ``filename`` attribute
    when they were opened from disk, anything else ``image_<n>``.
    """
    if isinstance(image, (str, Path)):
        return Path(image).name
    filename = getattr(image, "filename", None)
    if filename:
        return Path(filename).name
    return f"image_{index + 1}"
