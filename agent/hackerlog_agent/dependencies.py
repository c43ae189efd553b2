"""
DependencyInstaller — keeps the platform-specific core binary installed and current.

Pipeline (strictly sequential, each step awaited before the next):
  1. probe the local core for its version ("" when absent)
  2. ask <api>/core/version whether that version is the latest
  3. if not, stream the archive to a temp file
  4. extract into a staging dir, chmod 0755 on POSIX, swap it in for the old core dir
  5. delete the temp archive (always)

Failures are logged and swallowed: the agent degrades to "no core installed",
which the dispatcher already treats as a no-op.
"""

import asyncio
import os
import shutil
import tempfile
import zipfile
from dataclasses import dataclass
from pathlib import Path

import requests

from .config import log as default_log, install_root as default_install_root
from .constants import (
    API_BASE_URL, CORE_VERSION_PATH, CORE_DIR_NAME, EDITOR_TOKEN_HEADER,
    VERSION_CHECK_TIMEOUT, DOWNLOAD_TIMEOUT, DOWNLOAD_CHUNK_SIZE,
)
from .http_client import create_session
from .options import Settings
from .platform_info import resolve
from .validators import obfuscate_key
from .version import probe

_STAGING_SUFFIX = ".new"


class CoreInstallError(RuntimeError):
    """The install pipeline cannot continue (bad response, bad archive)."""


@dataclass(frozen=True)
class RemoteVersionInfo:
    download_url: str
    is_latest: bool


class DependencyInstaller:
    def __init__(self, options, logger=None, install_dir=None, target=None,
                 api_url=API_BASE_URL, session_factory=create_session):
        self._options = options
        self._log = logger or default_log
        self._root = Path(install_dir) if install_dir else default_install_root()
        self._target = target or resolve()
        self._version_url = api_url.rstrip("/") + CORE_VERSION_PATH
        self._session_factory = session_factory
        self._lock = asyncio.Lock()

    # ─── Locations ───────────────────────────────────────────────

    @property
    def install_root(self) -> Path:
        return self._root

    @property
    def core_dir(self) -> Path:
        return self._root / CORE_DIR_NAME

    @property
    def core_location(self) -> Path:
        return self.core_dir / self._target.core_filename

    def is_core_installed(self) -> bool:
        """Checked on every use; never cached."""
        installed = self.core_location.is_file()
        self._log.debug("Core is installed: %s", installed)
        return installed

    # ─── Public entry point ──────────────────────────────────────

    async def ensure_installed(self) -> bool:
        """
        Install or update the core. Never raises.
        Returns whether a core binary is present afterwards.
        """
        async with self._lock:
            try:
                await self._install_or_update()
            except (requests.RequestException, CoreInstallError, zipfile.BadZipFile,
                    OSError, ValueError) as e:
                self._log.error("Core install failed: %s", e)
                self._log.debug("Core install traceback", exc_info=True)
            return self.is_core_installed()

    async def _install_or_update(self):
        self._root.mkdir(parents=True, exist_ok=True)

        current_version = await probe(self.core_location, logger=self._log)
        self._log.info("Local core version: %s", current_version or "not installed")

        session = self._session_factory(self._options.get_setting(Settings.PROXY))
        try:
            info = await asyncio.to_thread(self.fetch_latest, session, current_version)
            if info.is_latest and current_version:
                self._log.info("Core %s is up to date", current_version)
                return

            self._log.info("Downloading hackerlog core...")
            archive = await asyncio.to_thread(self.download, session, info.download_url)
        finally:
            session.close()

        await asyncio.to_thread(self.extract, archive)
        self._log.info("Core installed at %s", self.core_location)

    # ─── Steps (blocking; run off the event loop) ─────────────────

    def fetch_latest(self, session, current_version) -> RemoteVersionInfo:
        params = {
            "currentVersion": current_version,
            "os": self._target.os.value,
            "arch": self._target.arch.value,
        }
        headers = {}
        editor_key = self._options.get_setting(Settings.EDITOR_KEY)
        if editor_key:
            headers[EDITOR_TOKEN_HEADER] = editor_key

        self._log.debug(
            "Version check %s params=%s key=%s",
            self._version_url, params, obfuscate_key(editor_key),
        )
        resp = session.get(
            self._version_url, params=params, headers=headers,
            timeout=VERSION_CHECK_TIMEOUT,
        )
        if resp.status_code != 200:
            raise CoreInstallError(
                f"Version check failed: HTTP {resp.status_code}: {resp.text[:200]}"
            )

        data = resp.json()
        if not isinstance(data, dict):
            raise CoreInstallError("Version check returned a non-object body")
        info = RemoteVersionInfo(
            download_url=data.get("download") or "",
            is_latest=bool(data.get("latest", False)),
        )
        if not info.is_latest and not info.download_url:
            raise CoreInstallError("Version check response has no download URL")
        return info

    def download(self, session, url) -> Path:
        """Stream `url` into a temp .zip under the install root and return its path."""
        if not url:
            raise CoreInstallError("No download URL for core")
        fd, tmp_name = tempfile.mkstemp(prefix="core-", suffix=".zip", dir=str(self._root))
        archive = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as out:
                with session.get(url, stream=True, timeout=DOWNLOAD_TIMEOUT) as resp:
                    resp.raise_for_status()
                    for chunk in resp.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        if chunk:
                            out.write(chunk)
        except Exception:
            archive.unlink(missing_ok=True)
            raise
        self._log.debug("Downloaded %s → %s (%d bytes)", url, archive, archive.stat().st_size)
        return archive

    def extract(self, archive):
        """
        Unpack `archive` into a staging dir, then replace the core dir with it.
        The archive is deleted whether or not extraction succeeds.
        """
        archive = Path(archive)
        staging = self.core_dir.with_name(self.core_dir.name + _STAGING_SUFFIX)
        try:
            if staging.exists():
                shutil.rmtree(staging)
            self._log.debug("Extracting hackerlog core into %s...", staging)
            with zipfile.ZipFile(archive) as zf:
                zf.extractall(staging)

            binary = staging / self._target.core_filename
            if not binary.is_file():
                raise CoreInstallError(f"Archive does not contain {self._target.core_filename}")
            if not self._target.is_windows:
                os.chmod(binary, 0o755)

            self.remove_core()
            os.replace(staging, self.core_dir)
            self._log.debug("Finished extracting hackerlog core.")
        finally:
            archive.unlink(missing_ok=True)
            if staging.exists():
                shutil.rmtree(staging, ignore_errors=True)

    def remove_core(self):
        """Delete the previous install so files dropped between versions don't linger."""
        if self.core_dir.exists():
            shutil.rmtree(self.core_dir)
