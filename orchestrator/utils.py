"""Utility functions for the orchestrator."""
from pathlib import Path

from rich.console import Console

from document_reader import SUPPORTED_EXTENSIONS

err_console = Console(stderr=True)


def expand_document_paths(paths: tuple[str, ...]) -> list[str]:
    """Expand paths to include all readable documents in directories.

    Args:
        paths: Tuple of file paths and/or directory paths

    Returns:
        List of file paths with directories expanded, in argument order

    Raises:
        SystemExit: If a path is missing or a directory has no readable documents
    """
    files: list[str] = []

    for path_str in paths:
        path = Path(path_str)

        if path.is_file():
            files.append(path_str)
        elif path.is_dir():
            docs_in_dir = sorted(
                p for p in path.iterdir()
                if p.is_file() and p.suffix.lower().lstrip(".") in SUPPORTED_EXTENSIONS
            )

            if not docs_in_dir:
                err_console.print(
                    f"[red]Error:[/red] Directory '{path_str}' contains no .pdf, .txt or .md files."
                )
                raise SystemExit(1)

            files.extend(str(p) for p in docs_in_dir)
        else:
            err_console.print(
                f"[red]Error:[/red] Path '{path_str}' does not exist."
            )
            raise SystemExit(1)

    return files
