"""
Routes simples (hors routers) pour la page de commande.
- Sert / (et /index.html) depuis public/index.html si présent, sinon 404.
- /favicon.ico: pas de contenu (204) pour éviter des 404 dans les logs.
"""
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse, Response
from starlette.status import HTTP_204_NO_CONTENT


def register_routes(app: FastAPI, public_dir: Path) -> None:
    """
    Enregistre la page d’accueil et ses alias.
    - Laisse l’OpenAPI propre (include_in_schema=False).
    """
    index_path = public_dir / "index.html"

    def _index():
        if index_path.exists():
            return FileResponse(str(index_path))
        raise HTTPException(status_code=404)

    app.add_api_route("/", _index, methods=["GET"], include_in_schema=False)
    app.add_api_route("/index.html", _index, methods=["GET"], include_in_schema=False)

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=HTTP_204_NO_CONTENT)
