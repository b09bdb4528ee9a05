"""Convenience launcher for the FileDock development server.

Usage:
    Windows: python start_dev.py
    Linux:   python3 start_dev.py [--prod] [--port 8000]

Press Ctrl+C to stop. Runs Uvicorn with --reload against the in-process
dev file service unless --prod is given, in which case the remote file
service at FILEDOCK_REMOTE_URL is used. Run from the repository root.
"""

from __future__ import annotations

import argparse
import os
import signal
import subprocess
import sys
import time
from pathlib import Path
from typing import List, Tuple

ROOT_DIR = Path(__file__).resolve().parent
BACKEND_DIR = ROOT_DIR / "backend"

VENV_PYTHON = ROOT_DIR / (
    ".venv\\Scripts\\python.exe" if os.name == "nt" else ".venv/bin/python"
)

ProcessInfo = Tuple[str, subprocess.Popen]

# ANSI colors (disabled on Windows without VT support)
if os.name == "nt":
    os.system("")  # enable VT100 on Windows 10+

CYAN = "\033[36m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
RESET = "\033[0m"


def log(level: str, msg: str) -> None:
    colors = {"info": CYAN, "start": GREEN, "stop": YELLOW, "error": RED}
    color = colors.get(level, "")
    print(f"{color}[{level}]{RESET} {msg}")


def resolve_python() -> str:
    """Find the best Python interpreter for the widget host."""
    if VENV_PYTHON.exists():
        return str(VENV_PYTHON)
    log("info", "No venv found, using system Python")
    return sys.executable


def check_dependencies(python: str) -> bool:
    """Verify critical packages are importable."""
    result = subprocess.run(
        [python, "-c", "import fastapi; import uvicorn; import httpx; import filedock"],
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        log("error", "Missing dependencies. Run:")
        log("error", f"  cd {ROOT_DIR} && pip install -e '.[dev]'")
        return False
    return True


def start_process(name: str, cmd: List[str], cwd: Path) -> subprocess.Popen:
    log("start", f"{name}: {' '.join(cmd)}")
    if os.name == "nt":
        return subprocess.Popen(
            cmd, cwd=cwd, creationflags=subprocess.CREATE_NEW_PROCESS_GROUP
        )
    return subprocess.Popen(cmd, cwd=cwd, start_new_session=True)


def terminate_processes(processes: List[ProcessInfo]) -> None:
    for name, proc in processes:
        if proc.poll() is not None:
            continue
        log("stop", name)
        try:
            if os.name == "nt":
                proc.send_signal(signal.CTRL_BREAK_EVENT)
            elif hasattr(os, "killpg"):
                try:
                    os.killpg(os.getpgid(proc.pid), signal.SIGTERM)
                except ProcessLookupError:
                    pass
            else:
                proc.terminate()
            proc.wait(timeout=10)
        except subprocess.TimeoutExpired:
            proc.kill()


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the FileDock widget host")
    parser.add_argument("--prod", action="store_true", help="use the real remote file service")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()

    processes: List[ProcessInfo] = []
    python = resolve_python()
    log("info", f"Python: {python}")

    if not check_dependencies(python):
        return 1

    try:
        os.environ.setdefault("FILEDOCK_DEBUG", "true")
        os.environ.setdefault("FILEDOCK_LOG_LEVEL", "INFO")
        os.environ.setdefault("FILEDOCK_ENVIRONMENT", "development")
        os.environ["FILEDOCK_MODE"] = "prod" if args.prod else "dev"

        cmd = [
            python,
            "-m",
            "uvicorn",
            "filedock.main:app",
            "--reload",
            "--host",
            "0.0.0.0",
            "--port",
            str(args.port),
        ]
        proc = start_process("filedock", cmd, BACKEND_DIR)
        processes.append(("filedock", proc))

        log("info", "")
        log("info", f"  Widget:  http://localhost:{args.port}/")
        log("info", f"  API:     http://localhost:{args.port}/api/files")
        log("info", f"  Health:  http://localhost:{args.port}/api/health")
        if not args.prod:
            log("info", f"  Files:   http://localhost:{args.port}/remote/fileslist (dev)")
        log("info", "")
        log("info", "Press Ctrl+C to stop")

        while True:
            for name, proc in processes:
                retcode = proc.poll()
                if retcode is not None:
                    log("info", f"{name} exited with code {retcode}")
                    return retcode or 0
            time.sleep(0.5)

    except FileNotFoundError as exc:
        log("error", str(exc))
        return 1
    except KeyboardInterrupt:
        print()
        log("info", "Ctrl+C received, shutting down...")
        return 0
    finally:
        terminate_processes(processes)


if __name__ == "__main__":
    raise SystemExit(main())
