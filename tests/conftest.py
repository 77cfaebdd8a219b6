"""Shared pytest fixtures for formatter and CLI checks."""

from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from columnar.lib.config.settings import reset_separator
from columnar.lib.registry import ExtractorRegistry, MapperRegistry

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

PACKAGE_ROOT = Path(__file__).resolve().parents[1]


@dataclass(frozen=True, slots=True)
class CliResult:
    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str


@pytest.fixture(autouse=True)
def _restore_separator() -> Iterator[None]:
    reset_separator()
    yield
    reset_separator()


@pytest.fixture
def registry() -> ExtractorRegistry:
    reg = ExtractorRegistry()
    reg.register("id", lambda obj: obj)
    reg.register("x", lambda _obj: "x")
    reg.register("absent", lambda _obj: None)
    reg.register("str", str)
    return reg


@pytest.fixture
def mappers() -> MapperRegistry:
    reg = MapperRegistry()
    reg.register("length", len)
    return reg


@pytest.fixture
def package_root() -> Path:
    return PACKAGE_ROOT


@pytest.fixture
def cli_env(package_root: Path, tmp_path: Path) -> dict[str, str]:
    env = os.environ.copy()
    existing = env.get("PYTHONPATH", "")
    root = str(package_root / "src")
    env["PYTHONPATH"] = root if not existing else f"{root}{os.pathsep}{existing}"
    env["COLUMNAR_ROOT"] = str(tmp_path)
    env.pop("COLUMNAR_SEPARATOR", None)
    env.pop("COLUMNAR_COLOR", None)
    return env


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str], Path]:
    def _write(content: str) -> Path:
        config_path = tmp_path / ".columnar" / "config.toml"
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(content, encoding="utf-8")
        return config_path

    return _write


@pytest.fixture
def run_columnar(package_root: Path, cli_env: dict[str, str]) -> Callable[..., CliResult]:
    def _run(args: list[str], stdin: str = "", timeout: float = 15.0) -> CliResult:
        completed = subprocess.run(
            [sys.executable, "-m", "columnar", *args],
            cwd=package_root,
            env=cli_env,
            input=stdin,
            capture_output=True,
            text=True,
            check=False,
            timeout=timeout,
        )
        return CliResult(
            args=tuple(args),
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )

    return _run
