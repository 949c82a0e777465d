import subprocess
from typing import List, Optional, Tuple

from _engine.console import console


def run_git_command(command: List[str], cwd: Optional[str] = None) -> Tuple[int, str, str]:
    """
    Runs a git command and returns its return code, stdout, and stderr.

    Args:
        command (List[str]): The git command and its arguments as a list of strings.
                             Example: ["git", "rev-parse", "HEAD"]
        cwd (Optional[str]): Repository directory to run the command in.

    Returns:
        Tuple[int, str, str]: The command's return code, stdout and stderr
                              (decoded as UTF-8, invalid bytes replaced).
                              Returns (1, "", "<details>") if git could not be started.
    """
    try:
        # check=False: non-zero exit codes are reported to the caller, not raised
        result = subprocess.run(
            command,
            cwd=cwd or None,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
        return result.returncode, result.stdout, result.stderr.strip()
    except FileNotFoundError:
        error_msg = "Git command not found. Is Git installed and in your PATH?"
        console.print(f"[error]Error:[/error] {error_msg}")
        return 1, "", error_msg
    except OSError as e:
        error_msg = f"Exception running command {' '.join(command)}: {e}"
        console.print(f"[error]Error:[/error] {error_msg}", markup=False)
        return 1, "", error_msg
