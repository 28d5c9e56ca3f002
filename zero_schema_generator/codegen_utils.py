import logging
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from zero_schema_generator.exceptions import CodeGenerationError


logger = logging.getLogger(__name__)

PRETTIER_EXECUTABLE = "prettier"


def find_prettier() -> Optional[str]:
    """Path of the prettier executable on PATH, or None."""
    return shutil.which(PRETTIER_EXECUTABLE)


def build_prettier_command(
    executable: str, resolve_config: bool, filepath: Optional[Path] = None
) -> List[str]:
    """Command line formatting TypeScript read from stdin."""
    command = [executable, "--parser", "typescript"]
    if resolve_config and filepath is not None:
        # Config is resolved relative to the file prettier pretends to format
        command.extend(["--stdin-filepath", str(filepath)])
    elif not resolve_config:
        command.append("--no-config")
    return command


def format_typescript_code(
    code_string: str, resolve_config: bool = True, filepath: Optional[Path] = None
) -> str:
    """
    Formats the given TypeScript code using prettier.

    Raises:
        CodeGenerationError: If prettier is not installed or rejects the code
    """
    executable = find_prettier()
    if executable is None:
        raise CodeGenerationError(
            "Unable to run prettier. Is it installed?",
            component="prettier",
            suggestions=[
                "Install prettier (npm install -g prettier)",
                "Disable the formatting pass (prettier: false)",
            ],
        )

    command = build_prettier_command(executable, resolve_config, filepath)
    logger.debug(f"Formatting TypeScript code using prettier: {' '.join(command)}")
    try:
        result = subprocess.run(
            command,
            input=code_string,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise CodeGenerationError(
            f"Could not start prettier: {e}", component="prettier"
        ) from e

    if result.returncode != 0:
        raise CodeGenerationError(
            f"prettier exited with status {result.returncode}: {result.stderr.strip()}",
            component="prettier",
        )

    logger.debug("Formatted code using prettier")
    return result.stdout


def write_output_file(output_dir: Union[str, Path], file_name: str, content: str) -> Path:
    """
    Create the output directory if needed and write the file.

    Returns:
        Path of the written file

    Raises:
        CodeGenerationError: If the directory or file cannot be written
    """
    output_path = Path(output_dir) / file_name
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise CodeGenerationError(
            f"Could not write {output_path}: {e}", component="writer", path=str(output_path)
        ) from e

    logger.debug(f"Generated file: {output_path}")
    return output_path
