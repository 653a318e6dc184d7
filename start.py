"""Simple launcher for the CO2 emission calculator page.

Starts the gradio server in apps/app.py with the project's virtualenv
interpreter when one exists.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path


def main() -> None:
    project_root = Path(__file__).resolve().parent

    script_name = "apps/app.py"
    script_path = project_root / script_name
    if not script_path.exists():
        print(f"Não foi possível encontrar {script_name} na raiz do projeto.")
        sys.exit(1)

    venv_python = project_root / ".venv" / "bin" / "python"
    if not venv_python.exists():
        venv_python = project_root / ".venv" / "Scripts" / "python.exe"

    python_exe = str(venv_python) if venv_python.exists() else sys.executable
    cmd = [python_exe, str(script_path)]
    print(f"Iniciando {script_name} com: {' '.join(cmd)}")
    subprocess.run(cmd, check=False)


if __name__ == "__main__":
    main()
