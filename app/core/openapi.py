"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) modifie le schéma généré par FastAPI pour :

ajouter une description des conventions de l'écran devoirs,

centraliser la personnalisation du Swagger.
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "Administration des devoirs (FastAPI + SQLModel).\n\n"
            "### Conventions\n"
            "- Toutes les routes `/admin/*` exigent une session admin (cookie `session` ou Bearer).\n"
            "- Écritures : formulaire `application/x-www-form-urlencoded` avec un champ `intent`.\n"
            "- Erreurs d'écriture : 400 `{\"error\": message}` si `Accept: application/json`.\n"
            "- Horodatages en UTC, dates de devoir au format `YYYY-MM-DD`.\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
