from fastapi import FastAPI

from backend.config import Settings

# Origines du Square Web Payments SDK (script + iframe de saisie carte + tokenisation)
SQUARE_SDK_ORIGINS = {
    "production": ["https://web.squarecdn.com", "https://pci-connect.squareup.com"],
    "sandbox": ["https://sandbox.web.squarecdn.com", "https://pci-connect.squareupsandbox.com"],
}

def register_security_middleware(app: FastAPI, settings: Settings) -> None:
    square_origins = SQUARE_SDK_ORIGINS["production" if settings.is_production else "sandbox"]

    @app.middleware("http")
    async def security_headers(request, call_next):
        response = await call_next(request)

        # En-têtes de sécurité
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Permissions-Policy", "geolocation=(), microphone=(), camera=()")
        if settings.is_production:
            response.headers.setdefault("Strict-Transport-Security", "max-age=63072000; includeSubDomains")

        # CSP: le SDK Square charge un script et une iframe carte
        # CDN des assets de /docs (Swagger UI de FastAPI)
        docs_cdns = ["https://cdn.jsdelivr.net"]
        sources = " ".join(square_origins)
        csp = (
            "default-src 'self'; "
            "base-uri 'self'; object-src 'none'; frame-ancestors 'none'; "
            "img-src 'self' data:; "
            f"style-src 'self' 'unsafe-inline' {sources} {' '.join(docs_cdns)}; "
            f"script-src 'self' {sources} {' '.join(docs_cdns)}; "
            f"frame-src {sources}; "
            f"connect-src 'self' {sources}"
        )
        response.headers["Content-Security-Policy"] = csp

        return response
