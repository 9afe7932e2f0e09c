"""QuickJS-ng binary installer for the ``qjs`` runtime.

Downloads precompiled QuickJS-ng binaries for Linux, macOS and Windows into
the package's ``bin`` directory and optionally copies the standalone
``qjs.js`` bundle next to them.

Usage:
    python -m morphql.install
    python -m morphql.install --bundle ../cli/dist/qjs/qjs.js
"""

import argparse
import logging
import os
from pathlib import Path
import shutil

import httpx

from morphql.constants import (
    BUNDLED_BIN_DIR,
    MIN_BINARY_SIZE,
    QJS_BINARIES,
    QJS_BUNDLE_NAME,
    QJS_RELEASE_URL,
    QJS_VERSION,
)

log = logging.getLogger(__name__)

# ruff: noqa: T201


def download_binary(client: httpx.Client, url: str) -> bytes | None:
    """Fetch one release asset, returning ``None`` on any failure."""
    try:
        response = client.get(url, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPError as e:
        log.warning("Download failed for %s: %s", url, e)
        return None

    if len(response.content) < MIN_BINARY_SIZE:
        log.warning(
            "Download for %s is too small (%d bytes)", url, len(response.content)
        )
        return None

    return response.content


def install_qjs(
    bin_dir: str | os.PathLike[str] | None = None,
    *,
    version: str = QJS_VERSION,
    client: httpx.Client | None = None,
    bundle_source: str | os.PathLike[str] | None = None,
) -> dict[str, bool]:
    """Install QuickJS-ng binaries (and optionally the JS bundle).

    Args:
        bin_dir: Target directory; defaults to the package ``bin`` directory.
        version: QuickJS-ng release tag.
        client: httpx client to use; one is created when omitted.
        bundle_source: Path to a built ``qjs.js`` bundle to copy.

    Returns:
        Mapping of installed file name to success flag.
    """
    target_dir = Path(bin_dir) if bin_dir is not None else BUNDLED_BIN_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    base_url = QJS_RELEASE_URL.format(version=version)

    owns_client = client is None
    http = client or httpx.Client(timeout=120.0)
    results: dict[str, bool] = {}

    try:
        for name in QJS_BINARIES:
            content = download_binary(http, base_url + name)
            if content is None:
                results[name] = False
                continue

            target = target_dir / name
            target.write_bytes(content)
            target.chmod(0o755)
            log.info(
                "Installed %s (%.2f MB)", target, len(content) / 1024 / 1024
            )
            results[name] = True
    finally:
        if owns_client:
            http.close()

    if bundle_source is not None:
        source = Path(bundle_source)
        if source.is_file():
            shutil.copyfile(source, target_dir / QJS_BUNDLE_NAME)
            results[QJS_BUNDLE_NAME] = True
        else:
            log.warning("QuickJS bundle not found: %s", source)
            results[QJS_BUNDLE_NAME] = False

    return results


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for installing the QuickJS runtime."""
    parser = argparse.ArgumentParser(
        description="Install QuickJS-ng binaries for the morphql qjs runtime",
        prog="python -m morphql.install",
    )
    parser.add_argument("--bin-dir", help="Target directory (default: package bin/)")
    parser.add_argument("--version", default=QJS_VERSION, help="QuickJS-ng release tag")
    parser.add_argument("--bundle", help="Path to a built qjs.js bundle to copy")
    args = parser.parse_args(argv)

    target_dir = args.bin_dir or BUNDLED_BIN_DIR
    print(f"Installing QuickJS-ng {args.version} binaries to {target_dir}...")

    results = install_qjs(
        args.bin_dir, version=args.version, bundle_source=args.bundle
    )
    for name, ok in results.items():
        print(f"  {name}: {'Done' if ok else 'FAILED'}")

    print("\nInstallation complete.")
    return 0 if all(results.values()) else 1


if __name__ == "__main__":
    raise SystemExit(main())
