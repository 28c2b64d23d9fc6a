"""
➡️ But : assembler toutes les pièces du puzzle.

Crée l’instance FastAPI (app).

Configure :

logging (stdout),

titre, version, tags,

schéma OpenAPI personnalisé,

traduction des sessions absentes/invalides (redirection vers /auth/login ou 401 JSON).

Inclut les routers (/auth, /admin/homework).

Initialise la base au démarrage (lifespan).

🔹 Avantages :

Centralise la configuration du serveur HTTP.

Point unique d’exécution : uvicorn app.main:app --reload.
"""

import logging
from contextlib import asynccontextmanager
from urllib.parse import urlencode

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from app.api.dependencies import wants_json
from app.api.routers import authentication, homework
from app.core.config import settings
from app.core.logging import setup_logging
from app.core.openapi import custom_openapi
from app.db.session import init_db
from app.features.authentication.services import NotAuthenticated

import uvicorn

logger = logging.getLogger(__name__)


# Démarrage
@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db()
    logger.info("%s started (env=%s)", settings.APP_NAME, settings.ENV)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "auth", "description": "Session admin (connexion / déconnexion)"},
        {"name": "homework", "description": "Gestion des devoirs"},
    ],
)


@app.exception_handler(NotAuthenticated)
async def not_authenticated_handler(request: Request, exc: NotAuthenticated):
    if wants_json(request):
        return JSONResponse({"error": exc.detail}, status_code=status.HTTP_401_UNAUTHORIZED)
    next_url = request.url.path
    if request.url.query:
        next_url = f"{next_url}?{request.url.query}"
    return RedirectResponse(
        f"/auth/login?{urlencode({'next': next_url})}",
        status_code=status.HTTP_303_SEE_OTHER,
    )


@app.get("/", include_in_schema=False)
def index():
    return RedirectResponse(homework.HOMEWORK_URL, status_code=status.HTTP_303_SEE_OTHER)


# Routers
app.include_router(authentication.router)
app.include_router(homework.router)

# Génération du schéma OpenAPI custom
app.openapi = lambda: custom_openapi(app)

if __name__ == "__main__":
    uvicorn.run("app.main:app", host="127.0.0.1", port=8080, reload=(settings.ENV == "dev")) # http://localhost:8080
