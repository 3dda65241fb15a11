"""Result writer for saving import results.

This module provides the ResultWriter class for writing an ImportResult as
JSON, next to the input mesh by default.
"""

import json
from pathlib import Path

from planarize.domain import ImportResult
from planarize.exceptions import ResultSaveError


class ResultWriter:
    """Saves import results as JSON.

    Example:
        writer = ResultWriter()
        output = writer.save(result, ResultWriter.get_output_path(Path("patch.obj")))
    """

    def __init__(self, indent: int | None = 2) -> None:
        """Initialize the writer.

        Args:
            indent: JSON indentation (None for compact output)
        """
        self.indent = indent

    @staticmethod
    def get_output_path(input_path: Path, suffix: str = "-boundaries") -> Path:
        """Generate the output path for a mesh file.

        Args:
            input_path: Path to the input mesh
            suffix: Text appended to the file stem

        Returns:
            Path like ``patch-boundaries.json`` in the input's directory
        """
        return input_path.with_name(f"{input_path.stem}{suffix}.json")

    def save(self, result: ImportResult, output_path: Path) -> Path:
        """Write ``result`` to ``output_path``.

        Args:
            result: Import result to save
            output_path: Destination file

        Returns:
            The path written

        Raises:
            ResultSaveError: If the file cannot be written
        """
        try:
            output_path.write_text(
                json.dumps(result.to_dict(), indent=self.indent),
                encoding="utf-8",
            )
        except OSError as e:
            raise ResultSaveError(str(output_path), str(e)) from e
        return output_path
