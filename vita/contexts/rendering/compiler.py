"""
LaTeX Compilation Module

Compiles LaTeX source to PDF bytes with pdflatex (or the compiler named by
LATEX_COMPILER) inside a throwaway directory.
"""

import os
import re
import shutil
import subprocess
import tempfile
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from vita.contexts.rendering.logger import (
    _log_debug,
    log_compilation_result,
    log_compilation_start,
)

load_dotenv()

LATEX_COMPILER = os.getenv("LATEX_COMPILER", "pdflatex")
LOG_EXCERPT_LINES = 40


@dataclass
class CompilationResult:
    """
    Result of LaTeX compilation.

    Attributes:
        success: Whether compilation succeeded
        pdf_bytes: Generated PDF (None if failed)
        stdout: Standard output from the compiler
        stderr: Standard error from the compiler
        errors: List of parsed LaTeX errors
        warnings: List of parsed LaTeX warnings
        log_excerpt: Last lines of the .log file
    """

    success: bool
    pdf_bytes: Optional[bytes] = None
    stdout: str = ""
    stderr: str = ""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    log_excerpt: str = ""


def compiler_available(compiler: str = LATEX_COMPILER) -> bool:
    return shutil.which(compiler) is not None


def _parse_latex_log(log_content: str) -> Tuple[List[str], List[str]]:
    """
    Parse LaTeX log file for errors and warnings.

    Args:
        log_content: Content of the .log file

    Returns:
        Tuple of (errors, warnings)
    """
    errors = []
    warnings = []

    # LaTeX error pattern: "! Error message"
    error_pattern = re.compile(r"^! (.+)$", re.MULTILINE)
    for match in error_pattern.finditer(log_content):
        errors.append(match.group(1).strip())

    # With -file-line-error, errors read "./file.tex:12: message"
    file_line_pattern = re.compile(r"^\S+\.tex:\d+: (.+)$", re.MULTILINE)
    for match in file_line_pattern.finditer(log_content):
        message = match.group(1).strip()
        if message not in errors:
            errors.append(message)

    additional_error_patterns = [
        r"Undefined control sequence",
        r"File ended while scanning use of",
        r"Emergency stop",
    ]
    for pattern in additional_error_patterns:
        match = re.search(rf"({pattern}.*?)$", log_content, re.MULTILINE)
        if match and match.group(1) not in errors:
            errors.append(match.group(1))

    warning_patterns = [
        r"LaTeX Warning: (.+)",
        r"Package \w+ Warning: (.+)",
        r"Overfull \\hbox \((.+)\)",
        r"Underfull \\hbox \((.+)\)",
    ]
    for pattern in warning_patterns:
        for match in re.finditer(pattern, log_content, re.MULTILINE):
            warnings.append(match.group(1).strip())

    return errors, warnings


def compile_latex_source(
    source: str,
    document_name: str = "resume",
    num_passes: int = 2,
    compiler: str = LATEX_COMPILER,
    verbose: bool = False,
) -> CompilationResult:
    """
    Compile LaTeX source to PDF bytes.

    Args:
        source: Complete LaTeX document
        document_name: Stem of the .tex file, also used in log messages
        num_passes: Compiler passes (2 resolves tikz "remember picture" overlays)
        compiler: Compiler executable
        verbose: Log compiler output even on success

    Returns:
        CompilationResult; pdf_bytes is set only on success
    """
    with tempfile.TemporaryDirectory(prefix="vita_") as tmp:
        compile_dir = Path(tmp)
        tex_file = compile_dir / f"{document_name}.tex"
        tex_file.write_text(source, encoding="utf-8")

        log_compilation_start(document_name, compiler, num_passes, compile_dir)
        start_time = time.time()

        all_stdout = []
        all_stderr = []
        for _ in range(num_passes):
            cmd = [compiler, "-interaction=nonstopmode", "-file-line-error", tex_file.name]
            try:
                result = subprocess.run(
                    cmd,
                    cwd=compile_dir,
                    capture_output=True,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                )
            except FileNotFoundError:
                result = CompilationResult(success=False, errors=[f"LaTeX compiler not found: {compiler}"])
                log_compilation_result(document_name, result, time.time() - start_time, verbose)
                return result

            all_stdout.append(result.stdout)
            all_stderr.append(result.stderr)
            if result.returncode != 0:
                break

        errors: List[str] = []
        warnings: List[str] = []
        log_excerpt = ""

        log_file = compile_dir / f"{document_name}.log"
        if log_file.exists():
            # Compiler logs are latin-1 (font metadata is not valid UTF-8)
            log_content = log_file.read_text(encoding="latin-1")
            errors, warnings = _parse_latex_log(log_content)
            log_excerpt = "\n".join(log_content.splitlines()[-LOG_EXCERPT_LINES:])

        pdf_path = compile_dir / f"{document_name}.pdf"
        pdf_bytes = None
        if pdf_path.exists() and not errors:
            pdf_bytes = pdf_path.read_bytes()
        elif not errors:
            errors.append("PDF file was not generated")

        compilation = CompilationResult(
            success=pdf_bytes is not None,
            pdf_bytes=pdf_bytes,
            stdout="\n".join(all_stdout),
            stderr="\n".join(all_stderr),
            errors=errors,
            warnings=warnings,
            log_excerpt=log_excerpt,
        )

    log_compilation_result(document_name, compilation, time.time() - start_time, verbose)
    _log_debug(f"Removed compile directory {compile_dir}")
    return compilation
