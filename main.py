# main.py

from os import environ
from pathlib import Path
from subprocess import run


def start(cmmd: list[str]) -> None:
    run(cmmd, check=True)


def main() -> None:
    bin_path = Path(__file__).resolve().parent / ".venv" / "bin"

    # Apply pending migrations before serving
    start([f"{bin_path / 'alembic'}", "upgrade", "head"])

    cmmd = [
        f"{bin_path / 'uvicorn'}",
        "app.main:app",
        "--host",
        environ.get("HOST", "127.0.0.1"),
        "--port",
        environ.get("PORT", "8000"),
        "--reload",
        "--log-level",
        "info",
        "--loop",
        "uvloop",
        "--http",
        "httptools",
    ]
    start(cmmd)


if __name__ == "__main__":
    main()
