import subprocess

import pytest


class CallRecorder:
    """Stands in for subprocess.call; returns scripted exit codes per tool."""

    def __init__(self, codes=None, stdout_text=None):
        self.codes = codes or {}
        self.stdout_text = stdout_text
        self.calls = []

    def __call__(self, cmd, stdout=None, stderr=None, cwd=None):
        self.calls.append({"cmd": list(cmd), "cwd": cwd})
        tool = cmd[0]
        if stdout is not None and self.stdout_text is not None:
            stdout.write(self.stdout_text)
        code = self.codes.get(tool, 0)
        if isinstance(code, list):
            code = code.pop(0) if code else 0
        if isinstance(code, BaseException):
            raise code
        return code

    def tools(self):
        return [c["cmd"][0] for c in self.calls]

    def of(self, tool):
        return [c["cmd"] for c in self.calls if c["cmd"][0] == tool]


@pytest.fixture
def recorder(monkeypatch):
    def _make(codes=None, stdout_text=None):
        rec = CallRecorder(codes, stdout_text)
        monkeypatch.setattr(subprocess, "call", rec)
        return rec
    return _make
