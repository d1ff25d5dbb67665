"""Entry point: python -m swaggergen

Reads a Swagger document, generates model and request classes.
"""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    main()
