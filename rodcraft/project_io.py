# rodcraft/project_io.py
"""
Structure and result files (JSON).

The structure file is the editor's save format: ``{"rods": [...], "nodes":
[...]}`` with camelCase keys. Result files hold the solver output:
``{"displacements": [...], "resultOutput": [...]}``.
"""

import json
from pathlib import Path
from typing import Union

from .model import FullResult, StructureInput

PathLike = Union[str, Path]

DEFAULT_STRUCTURE_FILENAME = "rod_structure.json"


class StructureFileError(ValueError):
    """Raised when a structure or result file cannot be parsed."""
    pass


def structure_to_json(structure: StructureInput) -> str:
    return json.dumps(structure.to_dict(), indent=2, ensure_ascii=False)


def structure_from_json(text: str) -> StructureInput:
    """
    Parse the save format.

    Raises:
        StructureFileError: malformed JSON, missing rods/nodes arrays or
            missing fields inside them
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise StructureFileError(f"JSON parse error: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get('rods'), list) \
            or not isinstance(data.get('nodes'), list):
        raise StructureFileError("File does not contain 'rods' and 'nodes' arrays")

    try:
        return StructureInput.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise StructureFileError(f"Invalid structure entry: {e}") from e


def save_structure(structure: StructureInput, path: PathLike = DEFAULT_STRUCTURE_FILENAME) -> Path:
    path = Path(path)
    if path.parent and not path.parent.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(structure_to_json(structure), encoding="utf-8")
    return path


def load_structure(path: PathLike) -> StructureInput:
    return structure_from_json(Path(path).read_text(encoding="utf-8"))


def result_from_json(text: str) -> FullResult:
    """Parse solver output; raises StructureFileError on malformed input."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise StructureFileError(f"JSON parse error: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get('resultOutput'), list):
        raise StructureFileError("File does not contain a 'resultOutput' array")

    try:
        return FullResult.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise StructureFileError(f"Invalid result entry: {e}") from e


def load_result(path: PathLike) -> FullResult:
    return result_from_json(Path(path).read_text(encoding="utf-8"))
