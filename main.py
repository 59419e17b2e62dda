"""Main entry point for porting IntelliSense xml comments into Docs xml files."""

import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

from port_to_docs.intellisense_to_docs import main as port_main


def run_command(cmd_list: Sequence[str | Path], cwd: Path | str | None = None) -> None:
    """Run a command and exit if it fails."""
    cmd_str = " ".join(str(x) for x in cmd_list)
    print(f"Running: {cmd_str}")
    try:
        subprocess.run(cmd_list, check=True, cwd=cwd)
    except subprocess.CalledProcessError as e:
        print(f"Error executing command: {cmd_str}")
        sys.exit(e.returncode)


def main() -> int:
    """Run the port, optionally after the development checks (``--dev``)."""
    argv = sys.argv[1:]
    root_dir = Path(__file__).parent

    if "--dev" in argv:
        argv.remove("--dev")
        print("--- Running Development Checks ---")
        run_command([sys.executable, str(root_dir / "dev.py"), "--ci"], cwd=root_dir)
        print("\n✅ Development checks passed. Proceeding with the port.\n")

    return port_main(argv)


if __name__ == "__main__":
    raise SystemExit(main())
