from fastapi import Depends, FastAPI, File, HTTPException, Query, Request, Response, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from typing import Any, Dict, List, Optional, Union
import logging

import uvicorn
from starlette.datastructures import UploadFile as StarletteUploadFile

from errors import ActivityNotFoundError, MissingUploadError, register_exception_handlers
from logging_config import setup_logging
from models import ActivityIn, utc_now_iso
from repo_activities import ActivityRepo
from service_activities import ActivityService
from service_uploads import UPLOADS_MOUNT, UploadService
from settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

ENDPOINTS = [
    "GET    /api/activities",
    "GET    /api/activities/{id}",
    "POST   /api/activities",
    "PUT    /api/activities/{id}",
    "DELETE /api/activities/{id}",
    "POST   /api/upload",
    "GET    /api/health",
]


def get_activity_service(request: Request) -> ActivityService:
    return request.app.state.activity_service


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Application factory.

    The repo + services are built here and hung off `app.state`, so each
    app (and each test) gets its own empty store. Routes reach them
    through the `get_*` dependencies above.
    """

    settings = settings or default_settings
    setup_logging(settings.log_level)

    app = FastAPI(title="SmartTracker API")
    app.state.settings = settings
    app.state.activity_service = ActivityService(ActivityRepo())
    app.state.upload_service = UploadService(settings.upload_dir)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # StaticFiles refuses to mount a directory that does not exist yet
    upload_dir = app.state.upload_service.ensure_dir()
    app.mount(UPLOADS_MOUNT, StaticFiles(directory=upload_dir), name="uploads")

    @app.get("/api/activities")
    async def list_activities(
        search: Optional[str] = Query(None),
        svc: ActivityService = Depends(get_activity_service),
    ) -> List[Dict[str, Any]]:
        return [a.to_json() for a in svc.list_activities(search)]

    @app.get("/api/activities/{activity_id}")
    async def get_activity(activity_id: str, svc: ActivityService = Depends(get_activity_service)):
        try:
            return svc.get_activity(activity_id).to_json()
        except ActivityNotFoundError:
            raise HTTPException(status_code=404, detail="Activity not found")

    @app.post("/api/activities", status_code=201)
    async def create_activity(
        payload: Optional[ActivityIn] = None,
        svc: ActivityService = Depends(get_activity_service),
    ):
        if payload is None:
            payload = ActivityIn()
        return svc.create_activity(payload).to_json()

    @app.put("/api/activities/{activity_id}")
    async def update_activity(
        activity_id: str,
        patch: Optional[ActivityIn] = None,
        svc: ActivityService = Depends(get_activity_service),
    ):
        if patch is None:
            patch = ActivityIn()
        try:
            return svc.update_activity(activity_id, patch).to_json()
        except ActivityNotFoundError:
            raise HTTPException(status_code=404, detail="Activity not found")

    @app.delete("/api/activities/{activity_id}", status_code=204)
    async def delete_activity(activity_id: str, svc: ActivityService = Depends(get_activity_service)):
        try:
            svc.delete_activity(activity_id)
        except ActivityNotFoundError:
            raise HTTPException(status_code=404, detail="Activity not found")
        return Response(status_code=204)

    @app.post("/api/upload")
    async def upload_image(
        request: Request,
        image: Union[UploadFile, str, None] = File(None),
        uploads: UploadService = Depends(get_upload_service),
        cfg: Settings = Depends(get_settings),
    ):
        # A plain text part named `image` carries no file
        if not isinstance(image, StarletteUploadFile):
            image = None
        try:
            filename = uploads.save(
                image.filename if image is not None else None,
                image.file if image is not None else None,
            )
        except MissingUploadError as e:
            raise HTTPException(status_code=400, detail=str(e))

        base_url = cfg.public_base_url or str(request.base_url)
        return {"url": uploads.url_for(base_url, filename)}

    @app.get("/api/health")
    async def health():
        return {"status": "OK", "timestamp": utc_now_iso()}

    return app


def main() -> None:
    """Serve a fresh app. Under uvicorn directly: `uvicorn main:create_app --factory`."""

    app = create_app()
    logger.info(f"SmartTracker API running at http://localhost:{default_settings.port}")
    logger.info("Endpoints:")
    for line in ENDPOINTS:
        logger.info(f"   {line}")
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    main()
