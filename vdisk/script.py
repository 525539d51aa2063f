"""
vdisk.script
------------
Scripts of file manager operations.

A script is a YAML (or JSON) list of steps, for example::

    - op: mkdir
      name: aaa
    - op: cd
      path: aaa
    - op: touch
      name: notes.txt
      content: hello

Steps run in order against a single FileManager. A failed step is
reported in its outcome and the script goes on.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ValidationError, model_validator

from filestore import FileManager, Result

Operation = Literal["cd", "pwd", "mkdir", "touch", "write", "rmdir", "rm", "ls", "cat"]
NAMED_OPS = {"mkdir", "touch", "write", "rmdir", "rm", "cat"}


class ScriptStep(BaseModel):
    """One manager call."""

    op: Operation
    path: str = ""
    relative: bool = True
    name: str | None = None
    content: str = ""

    @model_validator(mode="after")
    def _name_required(self) -> ScriptStep:
        if self.op in NAMED_OPS and self.name is None:
            raise ValueError(f"'{self.op}' needs a 'name'")
        return self

    def describe(self) -> str:
        if self.op == "cd":
            return f"cd {self.path or '.'}" + ("" if self.relative else " (from root)")
        if self.op in NAMED_OPS:
            return f"{self.op} {self.name}"
        return self.op


class StepOutcome(BaseModel):
    step: ScriptStep
    result: Result


def run_step(manager: FileManager, step: ScriptStep) -> Result:
    """Dispatch ``step`` to the matching manager operation."""
    name = step.name or ""
    if step.op == "cd":
        return manager.change_directory(step.path, relative=step.relative)
    if step.op == "pwd":
        return Result.success(manager.current_path)
    if step.op == "mkdir":
        return manager.create_folder(name)
    if step.op == "touch":
        return manager.create_file(name, step.content)
    if step.op == "write":
        return manager.update_file(name, step.content)
    if step.op == "rmdir":
        return manager.delete_folder(name)
    if step.op == "rm":
        return manager.delete_file(name)
    if step.op == "ls":
        return manager.read_folder_contents()
    return manager.read_file_contents(name)


def run_script(manager: FileManager, steps: list[ScriptStep]) -> list[StepOutcome]:
    return [StepOutcome(step=step, result=run_step(manager, step)) for step in steps]


def parse_steps(raw_steps: Any) -> list[ScriptStep]:
    """Validate a list of step mappings. Raises ValueError if invalid."""
    if not isinstance(raw_steps, list):
        raise ValueError("A script must be a list of steps")
    steps = []
    for index, raw in enumerate(raw_steps, start=1):
        try:
            steps.append(ScriptStep.model_validate(raw))
        except ValidationError as exc:
            raise ValueError(f"Invalid step {index}: {exc}") from exc
    return steps


def load_script(path: str | Path) -> list[ScriptStep]:
    """Read and validate a script file (YAML first, falling back to JSON)."""
    text = Path(path).read_text()
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        data = json.loads(text)
    return parse_steps(data or [])


DEMO_SCRIPT: list[ScriptStep] = parse_steps([
    {"op": "ls"},
    {"op": "mkdir", "name": "aaa"},
    {"op": "ls"},
    {"op": "cd", "path": "aaa"},
    {"op": "ls"},
    {"op": "mkdir", "name": "bbb"},
    {"op": "cd", "path": "aaa/bbb", "relative": False},
    {"op": "pwd"},
    {"op": "cd", "path": "../.."},
    {"op": "pwd"},
    {"op": "ls"},
    {"op": "touch", "name": "yoyo", "content": "huhu"},
    {"op": "ls"},
    {"op": "cat", "name": "yoyo"},
    {"op": "write", "name": "yoyo", "content": "huuuuuuuuuuuuuuuuuuuuu"},
    {"op": "cat", "name": "yoyo"},
    {"op": "ls"},
    {"op": "rm", "name": "yoyo"},
    {"op": "ls"},
    {"op": "mkdir", "name": "ccc"},
    {"op": "rmdir", "name": "ccc"},
])


__all__ = ["DEMO_SCRIPT", "ScriptStep", "StepOutcome", "load_script", "parse_steps", "run_script", "run_step"]
