# -*- coding: utf-8 -*-
"""Program entry module."""
import sys
try:
    # absolute import first, works when installed
    from batch_watermarker.cli import main  # type: ignore
except ImportError as e:
    # fall back to the relative import only when the package name is unavailable
    if getattr(e, "name", None) in ("batch_watermarker", "batch_watermarker.cli"):
        from .cli import main  # type: ignore
    else:
        raise

if __name__ == "__main__":
    sys.exit(main())
