import pytest

from virtual_terminal import VirtualTerminal


@pytest.fixture
def make_terminal():
    """Build a VirtualTerminal fed with the given input chunks."""

    def _make(*chunks: bytes) -> VirtualTerminal:
        return VirtualTerminal(b"".join(chunks))

    return _make


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point ~ and the working directory at empty temp directories."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    return home
