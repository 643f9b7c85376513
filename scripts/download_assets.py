"""Download the vocabulary and ONNX encoder into the configured asset paths."""

import sys
from pathlib import Path

import httpx

from packpal.engine.config import get_settings


def download(url: str, dest: Path, client: httpx.Client | None = None) -> None:
    """Stream a file to disk, replacing any existing copy only on success."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    partial = dest.with_suffix(dest.suffix + ".part")
    http = client or httpx.Client(follow_redirects=True, timeout=60.0)
    try:
        with http.stream("GET", url) as response:
            response.raise_for_status()
            with open(partial, "wb") as f:
                for chunk in response.iter_bytes():
                    f.write(chunk)
    except Exception:
        partial.unlink(missing_ok=True)
        raise
    finally:
        if client is None:
            http.close()
    partial.replace(dest)
    print(f"Downloaded {url} -> {dest}")


def main() -> int:
    settings = get_settings()
    assets = [
        (settings.vocab_source_url, Path(settings.vocab_path)),
        (settings.embedding_model_source_url, Path(settings.embedding_model_path)),
    ]
    for url, dest in assets:
        if dest.exists():
            print(f"Skipping {dest} (already present)")
            continue
        try:
            download(url, dest)
        except httpx.HTTPError as e:
            print(f"Failed to download {url}: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
