from __future__ import annotations

import os
from pathlib import Path

import pytest

from applibrary.adapters.installed_state import DirectoryInstalledState
from applibrary.domain.errors import QueryUnavailableError
from applibrary.domain.model import NOT_INSTALLED, InstalledPackage

_MTIME_SECONDS = 1_700_000_000


def _install(root: Path, identifier: str, *, mtime: int = _MTIME_SECONDS) -> Path:
    path = root / identifier
    path.mkdir(parents=True)
    os.utime(path, (mtime, mtime))
    return path


def test_is_installed_reports_directory_mtime_in_millis(tmp_path: Path) -> None:
    _install(tmp_path, "com.acme.spaceshooter")
    query = DirectoryInstalledState(tmp_path)

    state = query.is_installed("com.acme.spaceshooter")

    assert state.installed
    assert state.updated_at == _MTIME_SECONDS * 1000


@pytest.mark.parametrize("identifier", ["missing.app", "", "..", "nested/app"])
def test_unknown_identifiers_are_not_installed(tmp_path: Path, identifier: str) -> None:
    (tmp_path / "nested" / "app").mkdir(parents=True)
    query = DirectoryInstalledState(tmp_path)

    assert query.is_installed(identifier) == NOT_INSTALLED


def test_plain_files_are_not_packages(tmp_path: Path) -> None:
    (tmp_path / "notes.txt").write_text("not an app")
    query = DirectoryInstalledState(tmp_path)

    assert not query.is_installed("notes.txt").installed
    assert query.list_installed() == []


def test_list_installed_scans_root(tmp_path: Path) -> None:
    _install(tmp_path, "b.app", mtime=2_000)
    _install(tmp_path, "a.app", mtime=1_000)

    query = DirectoryInstalledState(tmp_path)

    packages = sorted(query.list_installed(), key=lambda package: package.identifier)

    assert packages == [
        InstalledPackage(identifier="a.app", updated_at=1_000_000),
        InstalledPackage(identifier="b.app", updated_at=2_000_000),
    ]


def test_missing_root_means_nothing_installed(tmp_path: Path) -> None:
    query = DirectoryInstalledState(tmp_path / "does-not-exist")

    assert query.list_installed() == []
    assert not query.is_installed("anything").installed


def test_unreadable_root_is_reported_as_unavailable(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def deny(self: Path) -> None:
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "iterdir", deny)

    with pytest.raises(QueryUnavailableError):
        DirectoryInstalledState(tmp_path).list_installed()


def test_package_removed_during_scan_is_skipped(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _install(tmp_path, "kept.app", mtime=3_000)
    _install(tmp_path, "gone.app")
    original_stat = Path.stat

    def stat(self: Path, *, follow_symlinks: bool = True) -> os.stat_result:
        if self.name == "gone.app":
            raise FileNotFoundError(2, "No such file or directory", str(self))
        return original_stat(self, follow_symlinks=follow_symlinks)

    monkeypatch.setattr(Path, "stat", stat)

    packages = DirectoryInstalledState(tmp_path).list_installed()

    assert packages == [InstalledPackage(identifier="kept.app", updated_at=3_000_000)]
