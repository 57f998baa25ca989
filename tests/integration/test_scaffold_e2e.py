"""End-to-end tests for the ``stackcraft`` command.

These run the real CLI entry point, including real subprocesses, against a
temporary directory.  ``npm`` and ``npx`` are replaced by small shell scripts
that only record how they were called, so no network access or Node.js
installation is required.
"""

from __future__ import annotations

import json
import os
import select
import shutil
import signal
import stat
import subprocess
import sys
import time
from pathlib import Path
from unittest.mock import patch

import pytest

from stackcraft.cli import main

POSIX_ONLY = pytest.mark.skipif(
    sys.platform == "win32", reason="fake npm/npx are POSIX shell scripts"
)
REPO_ROOT = Path(__file__).resolve().parents[2]

# Framework generators create the target directory, so the fake does too.
FAKE_TOOL = """#!/bin/sh
echo "$(basename "$0") $*" >> "$STACKCRAFT_TEST_LOG"
case "$*" in
  *" frontend"*) mkdir -p frontend ;;
esac
"""


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_node(tmp_path: Path, monkeypatch) -> Path:
    """Install recording ``npm``/``npx`` scripts and point stackcraft at them.

    Returns the path of the invocation log.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    for name in ("npm", "npx"):
        tool = bin_dir / name
        tool.write_text(FAKE_TOOL, encoding="utf-8")
        tool.chmod(tool.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    log = tmp_path / "commands.log"
    output_dir = tmp_path / "out"
    output_dir.mkdir()
    monkeypatch.setenv("STACKCRAFT_TEST_LOG", str(log))
    monkeypatch.setenv("STACKCRAFT_NPM", str(bin_dir / "npm"))
    monkeypatch.setenv("STACKCRAFT_NPX", str(bin_dir / "npx"))
    monkeypatch.setenv("STACKCRAFT_OUTPUT_DIR", str(output_dir))
    return log


def _run(argv: list[str], prompter) -> None:
    with patch("stackcraft.cli.Prompter", return_value=prompter):
        main(argv)


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


@POSIX_ONLY
class TestDemoProject:
    @pytest.mark.integration
    def test_default_choices(self, fake_node: Path, tmp_path: Path, scripted) -> None:
        """Frontend 0, no libraries, backend 0, MongoDB, nothing extra."""
        prompter = scripted([0, False, False, False, 0, False, False, 0, 0, False, 3])
        _run(["demo"], prompter)

        root = tmp_path / "out" / "demo"
        for rel in (
            "frontend/pages/index.js",
            "frontend/components/Button.js",
            "frontend/auth/AuthForm.js",
            "frontend/tailwind.config.js",
            "frontend/styles/globals.css",
            "backend/server.js",
            "backend/models/user.js",
            "backend/middleware/authMiddleware.js",
            "backend/routes/userRoutes.js",
            "backend/package.json",
        ):
            assert (root / rel).is_file(), f"Missing {rel}"
        assert not (root / "frontend" / "pages" / "_app.js").exists()

        env = (root / "backend" / ".env").read_text(encoding="utf-8")
        assert "DB_URI=mongodb://localhost:27017/your_db_name" in env.splitlines()

        manifest = json.loads((root / "backend" / "package.json").read_text(encoding="utf-8"))
        assert "mongoose" in manifest["dependencies"]

        assert not prompter.answers
        commands = fake_node.read_text(encoding="utf-8").splitlines()
        assert commands == [
            "npm init -y",
            "npx create-next-app@latest frontend --use-npm",
            "npm install tailwindcss postcss autoprefixer",
            "npx tailwindcss init",
            "npm install",
        ]

    @pytest.mark.integration
    def test_frontend_only_with_everything(self, fake_node: Path, tmp_path: Path, scripted) -> None:
        prompter = scripted([2, True, True, True, 3, True, True, 0])
        _run(["shop"], prompter)

        root = tmp_path / "out" / "shop"
        assert (root / "frontend" / "pages" / "_app.js").is_file()
        assert not (root / "backend").exists()

        commands = fake_node.read_text(encoding="utf-8").splitlines()
        assert "npm init vue@latest frontend" in commands
        assert (
            "npm install redux react-redux @reduxjs/toolkit axios react-icons" in commands
        )
        assert commands[-1] == "npm install jsonwebtoken passport"

    @pytest.mark.integration
    def test_failing_scaffold_exits_1(self, fake_node: Path, tmp_path: Path, scripted) -> None:
        npx = fake_node.parent / "bin" / "npx"
        npx.write_text("#!/bin/sh\nexit 7\n", encoding="utf-8")

        with pytest.raises(SystemExit) as excinfo:
            _run(["broken"], scripted([0]))
        assert excinfo.value.code == 1
        assert not (tmp_path / "out" / "broken" / "frontend" / "pages").exists()


def _read_until(fd: int, marker: str, timeout: float) -> str:
    """Read terminal output from *fd* until *marker* appears or the child exits."""
    output = ""
    deadline = time.monotonic() + timeout
    while marker not in output and time.monotonic() < deadline:
        ready, _, _ = select.select([fd], [], [], 0.1)
        if not ready:
            continue
        try:
            chunk = os.read(fd, 1024)
        except OSError:
            break
        if not chunk:
            break
        output += chunk.decode("utf-8", errors="replace")
    return output


@POSIX_ONLY
class TestInterrupt:
    @pytest.mark.integration
    def test_ctrl_c_at_frontend_menu_exits_0(self, tmp_path: Path) -> None:
        """Ctrl+C while a menu waits for input cancels the run at once."""
        pty = pytest.importorskip("pty")
        true = shutil.which("true")
        if true is None:
            pytest.skip("no 'true' executable on PATH")

        env = {
            **os.environ,
            "STACKCRAFT_NPM": true,
            "STACKCRAFT_NPX": true,
            "STACKCRAFT_OUTPUT_DIR": str(tmp_path),
            "TERM": "dumb",
            "NO_COLOR": "1",
            "PYTHONPATH": os.pathsep.join(
                p for p in (str(REPO_ROOT), os.environ.get("PYTHONPATH")) if p
            ),
        }
        master, slave = pty.openpty()
        proc = subprocess.Popen(
            [sys.executable, "-c", "from stackcraft.cli import main; main(['demo'])"],
            stdin=slave,
            stdout=slave,
            stderr=slave,
            env=env,
            close_fds=True,
        )
        os.close(slave)
        try:
            output = _read_until(master, "Choose frontend framework", timeout=30)
            assert "Choose frontend framework" in output

            proc.send_signal(signal.SIGINT)
            returncode = proc.wait(timeout=15)
            output += _read_until(master, "canceled", timeout=5)
        finally:
            if proc.poll() is None:
                proc.kill()
                proc.wait()
            os.close(master)

        assert returncode == 0
        assert "Project creation has been canceled." in output
