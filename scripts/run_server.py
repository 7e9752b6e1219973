#!/usr/bin/env python
"""
Run the recipe import API.

Run manually:
    python scripts/run_server.py
"""
import os

import uvicorn


def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run("recipe_importer.app.main:app", host=host, port=port)


if __name__ == "__main__":
    main()
