"""
Montage des fichiers statiques.
Expose:
- /static -> tout le répertoire public
- /css, /js -> chemins utilisés par index.html
"""
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles


def mount_static_files(app: FastAPI, public_dir: Path) -> None:
    """
    Monte les répertoires statiques sur des préfixes stables.
    - Un répertoire absent n’est pas monté (check_dir de StaticFiles lèverait au démarrage).
    """
    if not public_dir.is_dir():
        return
    app.mount("/static", StaticFiles(directory=str(public_dir)), name="static")
    for sub in ("css", "js"):
        directory = public_dir / sub
        if directory.is_dir():
            app.mount(f"/{sub}", StaticFiles(directory=str(directory)), name=sub)
