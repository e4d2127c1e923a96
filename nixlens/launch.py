"""Locating and starting attribute-set evaluator workers."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping

EXECUTABLE_ENV = "NIXLENS_ATTRSET_EVAL"

LIBEXEC_DIR = "/usr/libexec"

EXECUTABLE_NAME = "nixlens-attrset-eval"

NULL_DEVICE = os.devnull


def attrset_eval_executable(environ: Mapping[str, str] | None = None) -> str:
    """The evaluator program: taken from the environment, else the installed one."""
    env = os.environ if environ is None else environ
    if EXECUTABLE_ENV in env:
        return env[EXECUTABLE_ENV]
    return f"{LIBEXEC_DIR}/{EXECUTABLE_NAME}"


def option_worker_stderr(name: str, directory: str | None = None) -> str:
    """Where an option worker's stderr goes: ``directory/name``, else the null device."""
    if directory is None:
        return NULL_DEVICE
    return f"{directory}/{name}"


def start_attrset_eval(
    stderr_path: str = NULL_DEVICE, executable: str | None = None
) -> subprocess.Popen[bytes]:
    """Start an evaluator with piped stdin and stdout, its stderr written to a file."""
    program = executable if executable is not None else attrset_eval_executable()
    with open(stderr_path, "wb") as stderr_file:
        return subprocess.Popen(
            [program],
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=stderr_file,
        )